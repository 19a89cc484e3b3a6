"""
Store-only ZIP Archive Builder.

Writes an ordered list of entries into a new archive, streaming source
files through a fixed-size buffer so memory use does not grow with file size.
"""

import logging
import os
import stat
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Union

from ..domain.errors import (
    CopyError,
    CreateError,
    FinalizeError,
    MemberStartError,
    SourceOpenError,
    WriteError,
)
from ..domain.models import ArchiveEntry, ArchiveRequest, InlineText, SourceFile

logger = logging.getLogger(__name__)

# zipfile reports misuse and format limits through these besides OSError
_ZIP_ERRORS = (OSError, ValueError, RuntimeError, zipfile.LargeZipFile)


@dataclass(frozen=True)
class BuildStats:
    """Summary of a finalized archive."""
    
    archive_path: Path
    member_count: int = 0
    bytes_written: int = 0
    archive_size: int = 0


class ArchiveBuilder:
    """
    Builds store-only ZIP archives from entry lists.
    
    Each call to build() owns its writer exclusively; a builder holds no
    per-archive state and may be shared between threads.
    
    Following Single Responsibility Principle.
    """
    
    # Read buffer size (1MB)
    BUFFER_SIZE = 1024 * 1024
    
    # rwxr-xr-x on every member
    MEMBER_MODE = 0o755
    
    COMPRESSION = zipfile.ZIP_STORED
    
    def __init__(self, buffer_size: int | None = None):
        """
        Initialize builder.
        
        Args:
            buffer_size: Stream-copy buffer size in bytes (default: 1MB)
        """
        if buffer_size is not None and buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.buffer_size = buffer_size or self.BUFFER_SIZE
    
    def build_request(self, request: ArchiveRequest) -> BuildStats:
        """Build the archive described by a request."""
        return self.build(request.destination_path, request.entries)
    
    def build(
        self,
        destination_path: Union[str, Path],
        entries: Iterable[ArchiveEntry],
    ) -> BuildStats:
        """
        Create the archive at destination_path holding entries in order.
        
        The destination is created or truncated. On failure the partially
        written file is left in place and must be treated as invalid.
        
        Args:
            destination_path: Archive file to write (parent must exist)
            entries: Entries, written as members in iteration order
            
        Returns:
            Statistics of the finalized archive
            
        Raises:
            ArchiveError: The first failure encountered; no later entry is written
        """
        destination = Path(destination_path)
        logger.info(f"Creating archive: {destination}")
        
        try:
            output = open(destination, 'wb')
        except OSError as e:
            logger.error(f"Cannot create archive {destination}: {e}")
            raise CreateError(e, path=destination) from e
        
        with output:
            try:
                archive = zipfile.ZipFile(
                    output,
                    mode='w',
                    compression=self.COMPRESSION,
                    allowZip64=True,
                )
            except _ZIP_ERRORS as e:
                raise CreateError(e, path=destination) from e
            
            member_count = 0
            bytes_written = 0
            seen: set[str] = set()
            
            try:
                for entry in entries:
                    if entry.archive_path in seen:
                        logger.warning(f"Duplicate archive member appended: {entry.archive_path}")
                    seen.add(entry.archive_path)
                    
                    bytes_written += self._write_entry(archive, entry)
                    member_count += 1
            except Exception as e:
                logger.error(f"Archive build failed after {member_count} member(s): {e}")
                self._abandon(archive, destination)
                raise
            
            try:
                archive.close()
                output.flush()
                archive_size = output.tell()
            except _ZIP_ERRORS as e:
                logger.error(f"Cannot finalize archive {destination}: {e}")
                raise FinalizeError(e, path=destination) from e
        
        logger.info(
            f"Archive created: {destination.name} "
            f"({member_count} members, {archive_size:,} bytes)"
        )
        return BuildStats(
            archive_path=destination,
            member_count=member_count,
            bytes_written=bytes_written,
            archive_size=archive_size,
        )
    
    def _write_entry(self, archive: zipfile.ZipFile, entry: ArchiveEntry) -> int:
        """Write one entry as a member and return its byte count."""
        payload = entry.payload
        
        if isinstance(payload, SourceFile):
            return self._copy_source(archive, entry.archive_path, payload.path)
        
        data = b''
        if isinstance(payload, InlineText):
            try:
                data = payload.encode()
            except UnicodeEncodeError as e:
                raise WriteError(e, path=entry.archive_path) from e
        return self._write_bytes(archive, entry.archive_path, data)
    
    def _copy_source(
        self,
        archive: zipfile.ZipFile,
        archive_path: str,
        source_path: Path,
    ) -> int:
        """
        Stream a source file into a new member.
        
        The source is opened before the member is registered so its size
        is known up front and members over 4GB get ZIP64 headers.
        
        Args:
            archive: Open archive writer
            archive_path: Member name
            source_path: File to copy
            
        Returns:
            Number of bytes copied
        """
        # Opened ahead of the member so fstat can size its header
        try:
            source = open(source_path, 'rb')
        except OSError as e:
            raise SourceOpenError(e, path=source_path) from e
        
        with source:
            try:
                size = os.fstat(source.fileno()).st_size
            except OSError as e:
                raise SourceOpenError(e, path=source_path) from e
            
            member = self._start_member(archive, archive_path, size)
            logger.debug(f"Copying {source_path} -> {archive_path} ({size:,} bytes)")
            
            copied = 0
            try:
                with member:
                    while True:
                        chunk = source.read(self.buffer_size)
                        if not chunk:
                            break
                        member.write(chunk)
                        copied += len(chunk)
            except _ZIP_ERRORS as e:
                raise CopyError(e, path=source_path) from e
        
        return copied
    
    def _write_bytes(self, archive: zipfile.ZipFile, archive_path: str, data: bytes) -> int:
        """Write data into a new member in one call."""
        member = self._start_member(archive, archive_path, len(data))
        logger.debug(f"Writing {archive_path} ({len(data):,} bytes)")
        
        try:
            with member:
                if data:
                    member.write(data)
        except _ZIP_ERRORS as e:
            raise WriteError(e, path=archive_path) from e
        
        return len(data)
    
    def _start_member(self, archive: zipfile.ZipFile, archive_path: str, size: int) -> IO[bytes]:
        """
        Register a new member and open it for writing.
        
        Args:
            archive: Open archive writer
            archive_path: Member name
            size: Expected member size, used to choose ZIP64 headers
            
        Returns:
            Writable member stream
        """
        info = zipfile.ZipInfo(archive_path, date_time=time.localtime(time.time())[:6])
        info.compress_type = self.COMPRESSION
        info.create_system = 3  # unix, so external_attr carries the mode
        info.external_attr = (stat.S_IFREG | self.MEMBER_MODE) << 16
        info.file_size = size
        
        try:
            return archive.open(info, mode='w')
        except _ZIP_ERRORS as e:
            raise MemberStartError(e, path=archive_path) from e
    
    @staticmethod
    def _abandon(archive: zipfile.ZipFile, destination: Path) -> None:
        """Close the writer of a failed build, keeping the original error."""
        try:
            archive.close()
        except _ZIP_ERRORS as e:
            logger.warning(f"Could not close partial archive {destination}: {e}")
