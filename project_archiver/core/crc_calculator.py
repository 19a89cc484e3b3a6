"""
CRC32 Calculator.

Calculates CRC32 checksums for files and inline content, matching the
checksums ZIP stores per member.
"""

import zlib
from pathlib import Path

from ..domain.models import ArchiveEntry, InlineText, SourceFile


class CRC32Calculator:
    """
    Calculates CRC32 checksums.
    
    Following Single Responsibility Principle.
    """
    
    # Read buffer size (1MB)
    BUFFER_SIZE = 1024 * 1024
    
    def calculate_file_crc(self, file_path: Path) -> int:
        """
        Calculate CRC32 for a file.
        
        Args:
            file_path: Path to file
            
        Returns:
            CRC32 checksum as unsigned integer
        """
        crc = 0
        
        with open(file_path, 'rb') as f:
            while True:
                chunk = f.read(self.BUFFER_SIZE)
                if not chunk:
                    break
                crc = zlib.crc32(chunk, crc)
        
        # Ensure unsigned
        return crc & 0xFFFFFFFF
    
    def calculate_bytes_crc(self, data: bytes) -> int:
        """Calculate CRC32 for in-memory data."""
        return zlib.crc32(data) & 0xFFFFFFFF
    
    def calculate_entry_crc(self, entry: ArchiveEntry) -> int:
        """
        Calculate the CRC32 the archive member for entry should carry.
        
        Args:
            entry: Entry as passed to the builder
            
        Returns:
            CRC32 checksum as unsigned integer
        """
        payload = entry.payload
        if isinstance(payload, SourceFile):
            return self.calculate_file_crc(payload.path)
        if isinstance(payload, InlineText):
            return self.calculate_bytes_crc(payload.encode())
        return 0
