"""Protocol interfaces for dependency injection."""

from pathlib import Path
from typing import Iterable, Protocol, Sequence, Union

from .domain.models import ArchiveEntry


class ArchiveBuilderProtocol(Protocol):
    """Interface for archive creation operations."""
    
    def build(
        self,
        destination_path: Union[str, Path],
        entries: Iterable[ArchiveEntry],
    ):
        """
        Create archive holding entries in order.
        
        Args:
            destination_path: Archive file to write
            entries: Entries in member order
            
        Returns:
            Build statistics

        Raises:
            ArchiveError: On the first failure
        """
        ...


class ArchiveVerifierProtocol(Protocol):
    """Interface for archive verification."""
    
    def verify_archive(
        self,
        archive_path: Path,
        entries: Sequence[ArchiveEntry],
        skip_crc: bool = False,
    ):
        """
        Check a built archive against its entries.
        
        Args:
            archive_path: Archive to verify
            entries: Entries the archive was built from
            skip_crc: Skip content comparison
            
        Returns:
            Verification result
        """
        ...
