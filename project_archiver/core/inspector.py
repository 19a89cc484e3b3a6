"""
Project Package Inspector.

Lists the members of a built project package and classifies them by the
kind of project file they hold.
"""

import logging
import stat
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class MemberKind(Enum):
    """Project file kinds found in a package."""
    
    VIDEO = "mp4"
    SUBTITLE = "smi"
    SYNC = "syn"
    DEPOSITION = "dvt"
    TRANSCRIPT = "txt"
    OTHER = "other"
    
    @classmethod
    def from_name(cls, name: str) -> "MemberKind":
        """Classify a member by its file extension."""
        suffix = PurePosixPath(name).suffix.lower().lstrip('.')
        for kind in cls:
            if kind.value == suffix:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class PackageMember:
    """One member of a package, in archive order."""
    
    name: str
    size: int
    compressed_size: int
    stored: bool
    mode: int
    kind: MemberKind


@dataclass(frozen=True)
class PackageListing:
    """
    Immutable listing of a package.
    
    Attributes:
        archive_path: Package that was inspected
        members: Members in archive order
        archive_size: Size of the package file in bytes
    """
    
    archive_path: Path
    members: list[PackageMember] = field(default_factory=list)
    archive_size: int = 0
    
    @property
    def total_size(self) -> int:
        """Get combined uncompressed size of all members."""
        return sum(member.size for member in self.members)
    
    @property
    def duplicate_names(self) -> list[str]:
        """Get member names that occur more than once."""
        seen: set[str] = set()
        duplicates = []
        for member in self.members:
            if member.name in seen and member.name not in duplicates:
                duplicates.append(member.name)
            seen.add(member.name)
        return duplicates
    
    def members_of_kind(self, kind: MemberKind) -> list[PackageMember]:
        """Get members of one kind, in archive order."""
        return [member for member in self.members if member.kind is kind]


class PackageInspector:
    """
    Reads package listings.
    
    Following Single Responsibility Principle.
    """
    
    def inspect(self, archive_path: Path) -> PackageListing:
        """
        List the members of a package.
        
        Args:
            archive_path: Package to read
            
        Returns:
            Listing of all members in archive order
            
        Raises:
            OSError: If the package cannot be read
            zipfile.BadZipFile: If the file is not a ZIP archive
        """
        archive_path = Path(archive_path)
        logger.debug(f"Inspecting package: {archive_path}")
        
        with zipfile.ZipFile(archive_path) as archive:
            members = [
                PackageMember(
                    name=info.filename,
                    size=info.file_size,
                    compressed_size=info.compress_size,
                    stored=info.compress_type == zipfile.ZIP_STORED,
                    mode=stat.S_IMODE(info.external_attr >> 16),
                    kind=MemberKind.from_name(info.filename),
                )
                for info in archive.infolist()
                if not info.is_dir()
            ]
        
        return PackageListing(
            archive_path=archive_path,
            members=members,
            archive_size=archive_path.stat().st_size,
        )
