"""
Archive Verifier.

Checks a built archive against the entries it was built from.
"""

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..domain.models import ArchiveEntry
from .crc_calculator import CRC32Calculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    """Result of archive verification."""
    
    archive_path: Path
    passed: bool
    integrity_check: bool = False
    member_order_match: bool = False
    crc_check: bool = False
    error_message: str = ""
    expected_members: int = 0
    archived_members: int = 0
    crc_mismatches: int = 0


class ArchiveVerifier:
    """
    Verifies archive contents using multiple methods.
    
    Three-level verification:
    1. ZIP integrity test (stored CRC of every member)
    2. Member list comparison (same names, same order)
    3. CRC32 comparison (entry content vs archived member)
    
    Following Single Responsibility Principle.
    """
    
    def __init__(self, crc_calculator: CRC32Calculator | None = None):
        """
        Initialize verifier.
        
        Args:
            crc_calculator: CRC calculator (creates default if None)
        """
        self.crc_calculator = crc_calculator or CRC32Calculator()
    
    def verify_archive(
        self,
        archive_path: Path,
        entries: Sequence[ArchiveEntry],
        skip_crc: bool = False,
    ) -> VerificationResult:
        """
        Verify archive integrity using all available methods.
        
        Args:
            archive_path: Path to archive to verify
            entries: Entries the archive was built from
            skip_crc: Skip CRC comparison (faster but less thorough)
            
        Returns:
            Verification result with detailed status
        """
        archive_path = Path(archive_path)
        
        try:
            with zipfile.ZipFile(archive_path) as archive:
                members = archive.infolist()
                bad_member = archive.testzip()
        except (OSError, zipfile.BadZipFile) as e:
            logger.error(f"Archive integrity test failed: {e}")
            return VerificationResult(
                archive_path=archive_path,
                passed=False,
                error_message=f"Archive integrity test failed: {e}",
            )
        
        # Check 1: Archive integrity test
        if bad_member is not None:
            logger.error(f"Archive integrity test failed at member: {bad_member}")
            return VerificationResult(
                archive_path=archive_path,
                passed=False,
                error_message=f"Archive integrity test failed: bad CRC for {bad_member}",
                archived_members=len(members),
            )
        logger.debug("Archive integrity test: PASS")
        
        # Check 2: Member names and order
        expected_names = [entry.archive_path for entry in entries]
        archived_names = [member.filename for member in members]
        
        if expected_names != archived_names:
            logger.debug(f"Member list - Expected: {expected_names}, Archived: {archived_names}")
            return VerificationResult(
                archive_path=archive_path,
                passed=False,
                integrity_check=True,
                error_message=(
                    f"Member mismatch: expected {len(expected_names)} in order, "
                    f"got {len(archived_names)}"
                ),
                expected_members=len(expected_names),
                archived_members=len(archived_names),
            )
        
        # Check 3: CRC32 comparison (optional, slower for large sources)
        crc_mismatches = 0
        if not skip_crc:
            crc_mismatches = self._count_crc_mismatches(members, entries)
            
            if crc_mismatches:
                return VerificationResult(
                    archive_path=archive_path,
                    passed=False,
                    integrity_check=True,
                    member_order_match=True,
                    error_message=f"CRC mismatch: {crc_mismatches} members differ",
                    expected_members=len(expected_names),
                    archived_members=len(archived_names),
                    crc_mismatches=crc_mismatches,
                )
        
        # All checks passed
        return VerificationResult(
            archive_path=archive_path,
            passed=True,
            integrity_check=True,
            member_order_match=True,
            crc_check=not skip_crc,
            expected_members=len(expected_names),
            archived_members=len(archived_names),
        )
    
    def _count_crc_mismatches(
        self,
        members: Sequence[zipfile.ZipInfo],
        entries: Sequence[ArchiveEntry],
    ) -> int:
        """
        Compare CRC32 checksums member by member.
        
        Args:
            members: Archive members in archive order
            entries: Entries in build order
            
        Returns:
            Number of members whose content differs
        """
        logger.debug("Starting CRC verification (this may take a while)...")
        
        mismatches = 0
        for member, entry in zip(members, entries):
            try:
                expected_crc = self.crc_calculator.calculate_entry_crc(entry)
            except OSError as e:
                logger.warning(f"Cannot read source for {entry.archive_path}: {e}")
                mismatches += 1
                continue
            
            if member.CRC != expected_crc:
                logger.warning(
                    f"CRC mismatch for {member.filename}: "
                    f"{expected_crc:08X} vs {member.CRC:08X}"
                )
                mismatches += 1
        
        logger.debug(f"CRC verification - Mismatches: {mismatches}")
        return mismatches
