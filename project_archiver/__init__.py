"""
Project Archiver.

Packs project files (inline text such as transcripts and subtitles, plus
large media files on disk) into a single store-only ZIP package.

Public API:
    - ArchiveBuilder: Stream entries into a new archive
    - BuildDispatcher: Run builds off the calling thread
    - ArchiveEntry: Immutable entry description
    - archive_export: Command handler answering with an error message or None
"""

from .commands import ARCHIVE_EXPORT_COMMAND, archive_export
from .core.builder import ArchiveBuilder, BuildStats
from .core.dispatcher import BuildDispatcher
from .domain.errors import ArchiveError
from .domain.models import ArchiveEntry, ArchiveRequest

__all__ = [
    'ARCHIVE_EXPORT_COMMAND',
    'ArchiveBuilder',
    'ArchiveEntry',
    'ArchiveError',
    'ArchiveRequest',
    'BuildDispatcher',
    'BuildStats',
    'archive_export',
]

__version__ = '1.0.0'
