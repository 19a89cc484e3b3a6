"""Core package - business logic implementations."""

from .builder import ArchiveBuilder, BuildStats
from .crc_calculator import CRC32Calculator
from .dispatcher import BuildDispatcher
from .exporter import ExportResult, ProjectExporter
from .inspector import MemberKind, PackageInspector, PackageListing, PackageMember
from .verifier import ArchiveVerifier, VerificationResult

__all__ = [
    'ArchiveBuilder',
    'ArchiveVerifier',
    'BuildDispatcher',
    'BuildStats',
    'CRC32Calculator',
    'ExportResult',
    'MemberKind',
    'PackageInspector',
    'PackageListing',
    'PackageMember',
    'ProjectExporter',
    'VerificationResult',
]
