"""
Project Exporter.

Caller-side workflow around the builder: build, optionally verify, and
optionally remove the output of a failed export.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..domain.errors import ArchiveError
from ..domain.models import ArchiveRequest
from ..protocols import ArchiveBuilderProtocol, ArchiveVerifierProtocol
from .builder import ArchiveBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Result of a project export."""
    
    archive_path: Path
    success: bool
    error_message: str = ""
    member_count: int = 0
    input_size: int = 0
    archive_size: int = 0
    verified: bool = False


class ProjectExporter:
    """
    Exports project packages as archives.
    
    The builder never deletes a partially written archive. This class can,
    when asked to, because it is the caller of the build.
    """
    
    def __init__(
        self,
        builder: ArchiveBuilderProtocol | None = None,
        verifier: ArchiveVerifierProtocol | None = None,
        cleanup_on_failure: bool = False,
    ):
        """
        Initialize exporter.
        
        Args:
            builder: Archive builder (creates default if None)
            verifier: Verifier run after a successful build (skipped if None)
            cleanup_on_failure: Delete the destination file when the export fails
        """
        self.builder = builder or ArchiveBuilder()
        self.verifier = verifier
        self.cleanup_on_failure = cleanup_on_failure
    
    def export(self, request: ArchiveRequest) -> ExportResult:
        """
        Build, and verify if configured, the archive for request.
        
        Args:
            request: Parsed export request
            
        Returns:
            Export result; failures are reported, not raised
        """
        destination = Path(request.destination_path)
        
        try:
            stats = self.builder.build(destination, request.entries)
        except ArchiveError as e:
            self._discard(destination)
            return ExportResult(
                archive_path=destination,
                success=False,
                error_message=e.message,
            )
        
        verified = False
        if self.verifier is not None:
            verification = self.verifier.verify_archive(destination, request.entries)
            if not verification.passed:
                logger.error(f"Verification failed for {destination}: {verification.error_message}")
                self._discard(destination)
                return ExportResult(
                    archive_path=destination,
                    success=False,
                    error_message=f"VerificationError: {verification.error_message}",
                    member_count=stats.member_count,
                    input_size=stats.bytes_written,
                    archive_size=stats.archive_size,
                )
            verified = True
        
        return ExportResult(
            archive_path=destination,
            success=True,
            member_count=stats.member_count,
            input_size=stats.bytes_written,
            archive_size=stats.archive_size,
            verified=verified,
        )
    
    def _discard(self, destination: Path) -> None:
        """Remove the output of a failed export if cleanup is enabled."""
        if not self.cleanup_on_failure:
            return
        try:
            destination.unlink(missing_ok=True)
            logger.info(f"Removed incomplete archive: {destination}")
        except OSError as e:
            logger.warning(f"Failed to remove incomplete archive {destination}: {e}")
