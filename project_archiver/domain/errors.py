"""
Archive Build Errors.

Every failure of a build surfaces as one of these exceptions. Each carries
the path it relates to (where there is one) and a human-readable cause, and
renders as a single message suitable for direct display.
"""

from pathlib import Path
from typing import Optional, Union


class ArchiveError(Exception):
    """
    Base class for all archive build failures.
    
    Attributes:
        path: File or archive member the failure relates to (None if not applicable)
        cause: Description of the underlying cause
    """
    
    kind = "ArchiveError"
    action = "Archive operation failed"
    
    def __init__(self, cause: Union[str, BaseException], path: Union[str, Path, None] = None):
        self.cause = str(cause)
        self.path: Optional[str] = str(path) if path is not None else None
        super().__init__(self.message)
    
    @property
    def message(self) -> str:
        """Get the display message combining error kind and cause."""
        if self.path is None:
            return f"{self.kind}: {self.action}: {self.cause}"
        return f"{self.kind}: {self.action} {self.path}: {self.cause}"


class CreateError(ArchiveError):
    """The destination file could not be created or opened for writing."""
    
    kind = "CreateError"
    action = "Failed to create archive"


class MemberStartError(ArchiveError):
    """A new archive member could not be registered."""
    
    kind = "MemberStartError"
    action = "Failed to start archive member"


class SourceOpenError(ArchiveError):
    """A source file referenced by an entry could not be opened."""
    
    kind = "SourceOpenError"
    action = "Failed to open source"


class CopyError(ArchiveError):
    """Streaming a source file into its archive member failed."""
    
    kind = "CopyError"
    action = "Failed to copy"


class WriteError(ArchiveError):
    """Writing inline content into its archive member failed."""
    
    kind = "WriteError"
    action = "Failed to write content for"


class FinalizeError(ArchiveError):
    """The central directory could not be written."""
    
    kind = "FinalizeError"
    action = "Failed to finalize archive"


class DispatchError(ArchiveError):
    """The build could not be handed to, or collected from, the worker."""
    
    kind = "DispatchError"
    action = "Build dispatch failed"


class EntryValidationError(ArchiveError):
    """A request or entry descriptor is malformed."""
    
    kind = "EntryValidationError"
    action = "Invalid entry"
