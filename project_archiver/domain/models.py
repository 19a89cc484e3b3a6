"""
Project Archiver Domain Models.

Immutable value objects describing what goes into an archive.
An entry pairs a member name with exactly one payload variant.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence, Union

from .errors import EntryValidationError


@dataclass(frozen=True)
class InlineText:
    """Text written into the member as UTF-8 bytes."""
    
    text: str
    
    def encode(self) -> bytes:
        """Get the raw bytes written to the archive."""
        return self.text.encode('utf-8')


@dataclass(frozen=True)
class SourceFile:
    """File on disk streamed into the member."""
    
    path: Path


@dataclass(frozen=True)
class EmptyPayload:
    """Explicitly empty member (zero bytes)."""


Payload = Union[InlineText, SourceFile, EmptyPayload]


@dataclass(frozen=True)
class ArchiveEntry:
    """
    Immutable description of one archive member.
    
    Attributes:
        archive_path: Member name inside the archive (e.g. "media/video.mp4")
        payload: Where the member bytes come from
    """
    
    archive_path: str
    payload: Payload
    
    def __post_init__(self):
        if not isinstance(self.archive_path, str) or not self.archive_path:
            raise EntryValidationError(
                "archive path must be a non-empty string",
                path=repr(self.archive_path),
            )
    
    @classmethod
    def text(cls, archive_path: str, text: str) -> "ArchiveEntry":
        """Build an entry holding inline text."""
        return cls(archive_path, InlineText(text))
    
    @classmethod
    def file(cls, archive_path: str, source_path: Union[str, Path]) -> "ArchiveEntry":
        """Build an entry streamed from a file on disk."""
        return cls(archive_path, SourceFile(Path(source_path)))
    
    @classmethod
    def empty(cls, archive_path: str) -> "ArchiveEntry":
        """Build an entry that produces a zero-byte member."""
        return cls(archive_path, EmptyPayload())
    
    @property
    def is_source_file(self) -> bool:
        """Check if the member is streamed from disk."""
        return isinstance(self.payload, SourceFile)
    
    @classmethod
    def from_descriptor(
        cls,
        descriptor: Mapping[str, Any],
        allow_empty: bool = False,
    ) -> "ArchiveEntry":
        """
        Parse a wire descriptor ``{path, content?, source_path?}``.
        
        Args:
            descriptor: Mapping as received from the invoking layer
            allow_empty: Accept descriptors with neither payload as empty members
            
        Returns:
            Parsed entry
            
        Raises:
            EntryValidationError: If the descriptor is malformed
        """
        if not isinstance(descriptor, Mapping):
            raise EntryValidationError(
                f"expected an object, got {type(descriptor).__name__}",
            )
        
        archive_path = descriptor.get('path')
        if not isinstance(archive_path, str) or not archive_path:
            raise EntryValidationError(
                "'path' must be a non-empty string",
                path=repr(archive_path),
            )
        
        content = descriptor.get('content')
        source_path = descriptor.get('source_path')
        
        if content is not None and not isinstance(content, str):
            raise EntryValidationError("'content' must be a string", path=archive_path)
        if source_path is not None and (not isinstance(source_path, str) or not source_path):
            raise EntryValidationError("'source_path' must be a non-empty string", path=archive_path)
        
        if content is not None and source_path is not None:
            raise EntryValidationError(
                "entry has both 'content' and 'source_path'",
                path=archive_path,
            )
        
        if source_path is not None:
            return cls.file(archive_path, source_path)
        if content is not None:
            return cls.text(archive_path, content)
        
        if allow_empty:
            return cls.empty(archive_path)
        raise EntryValidationError(
            "entry has neither 'content' nor 'source_path'",
            path=archive_path,
        )


@dataclass(frozen=True)
class ArchiveRequest:
    """
    Immutable request to build one archive.
    
    Attributes:
        destination_path: Where the archive is written (parent must exist)
        entries: Entries in the order they become archive members
    """
    
    destination_path: Path
    entries: tuple[ArchiveEntry, ...] = ()
    
    @property
    def archive_paths(self) -> list[str]:
        """Get member names in archive order."""
        return [entry.archive_path for entry in self.entries]
    
    @property
    def source_files(self) -> list[Path]:
        """Get all source files referenced by the request."""
        return [
            entry.payload.path
            for entry in self.entries
            if isinstance(entry.payload, SourceFile)
        ]
    
    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        allow_empty: bool = False,
    ) -> "ArchiveRequest":
        """
        Parse an ``archive-export`` request payload.
        
        Accepts ``destination_path`` (or ``zip_path``) and ``entries``.
        
        Args:
            payload: Request mapping
            allow_empty: Accept entries with neither payload as empty members
            
        Returns:
            Parsed request
            
        Raises:
            EntryValidationError: If the payload or any entry is malformed
        """
        if not isinstance(payload, Mapping):
            raise EntryValidationError(
                f"request must be an object, got {type(payload).__name__}",
            )
        
        destination = payload.get('destination_path', payload.get('zip_path'))
        if not isinstance(destination, str) or not destination:
            raise EntryValidationError("'destination_path' must be a non-empty string")
        
        raw_entries = payload.get('entries', [])
        if isinstance(raw_entries, (str, bytes)) or not isinstance(raw_entries, Sequence):
            raise EntryValidationError("'entries' must be a list")
        
        entries = []
        for index, descriptor in enumerate(raw_entries):
            try:
                entries.append(ArchiveEntry.from_descriptor(descriptor, allow_empty))
            except EntryValidationError as e:
                raise EntryValidationError(
                    f"entries[{index}]: {e.cause}",
                    path=e.path,
                ) from e
        
        return cls(destination_path=Path(destination), entries=tuple(entries))
