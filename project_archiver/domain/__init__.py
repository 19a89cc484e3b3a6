"""Domain package - immutable models and error taxonomy."""

from .errors import (
    ArchiveError,
    CopyError,
    CreateError,
    DispatchError,
    EntryValidationError,
    FinalizeError,
    MemberStartError,
    SourceOpenError,
    WriteError,
)
from .models import (
    ArchiveEntry,
    ArchiveRequest,
    EmptyPayload,
    InlineText,
    Payload,
    SourceFile,
)

__all__ = [
    'ArchiveEntry',
    'ArchiveError',
    'ArchiveRequest',
    'CopyError',
    'CreateError',
    'DispatchError',
    'EmptyPayload',
    'EntryValidationError',
    'FinalizeError',
    'InlineText',
    'MemberStartError',
    'Payload',
    'SourceFile',
    'SourceOpenError',
    'WriteError',
]
