#!/usr/bin/env python3
"""
Project Archive Inspector.

Lists the members of a project package in archive order and reports what
kind of project file each one holds.

Usage:
    python project_archive_inspect.py <archive> [--json output.json]

Examples:
    # Show package contents
    python project_archive_inspect.py out/project.zip
    
    # Save listing to JSON
    python project_archive_inspect.py out/project.zip --json listing.json
"""

import argparse
import json
import logging
import sys
import zipfile
from pathlib import Path

from project_archiver.core import MemberKind, PackageInspector, PackageListing


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


def format_size(bytes_size: int) -> str:
    """
    Format byte size to human-readable string.
    
    Args:
        bytes_size: Size in bytes
        
    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.2f} PB"


def print_listing(listing: PackageListing) -> None:
    """
    Print package listing to console.
    
    Args:
        listing: Listing to display
    """
    print("\n" + "=" * 80)
    print("Project Package Contents")
    print("=" * 80)
    print(f"Path: {listing.archive_path}")
    print(f"Package size: {format_size(listing.archive_size)}")
    print(f"Members: {len(listing.members)} ({format_size(listing.total_size)} uncompressed)")
    print()
    
    counts = {kind: len(listing.members_of_kind(kind)) for kind in MemberKind}
    print("By kind:")
    for kind, count in counts.items():
        if count:
            print(f"  {kind.value}: {count}")
    print()
    
    print("Members:")
    print("-" * 80)
    for i, member in enumerate(listing.members, 1):
        method = "stored" if member.stored else "compressed"
        print(f"{i}. {member.name}")
        print(f"   Size: {format_size(member.size)} ({method}, mode {member.mode:o})")
    
    if listing.duplicate_names:
        print()
        print("⚠️  Duplicate member names:")
        for name in listing.duplicate_names:
            print(f"  - {name}")
    
    print("=" * 80)


def save_json(listing: PackageListing, output_path: Path) -> None:
    """
    Save package listing to JSON file.
    
    Args:
        listing: Listing to save
        output_path: Where to save JSON
    """
    data = {
        'archive_path': str(listing.archive_path),
        'archive_size': listing.archive_size,
        'total_size': listing.total_size,
        'duplicate_names': listing.duplicate_names,
        'members': [
            {
                'name': member.name,
                'size': member.size,
                'compressed_size': member.compressed_size,
                'stored': member.stored,
                'mode': f"{member.mode:o}",
                'kind': member.kind.value,
            }
            for member in listing.members
        ],
    }
    
    output_path.write_text(json.dumps(data, indent=2), encoding='utf-8')
    logger.info(f"Listing saved to: {output_path}")


def main() -> int:
    """
    Main entry point.
    
    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description='List the members of a project package',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    
    parser.add_argument(
        'archive',
        type=Path,
        help='Package to inspect',
    )
    
    parser.add_argument(
        '--json',
        type=Path,
        metavar='FILE',
        help='Save listing to JSON file',
    )
    
    args = parser.parse_args()
    
    if not args.archive.is_file():
        logger.error(f"Package does not exist: {args.archive}")
        return 1
    
    try:
        listing = PackageInspector().inspect(args.archive)
    except (OSError, zipfile.BadZipFile) as e:
        logger.error(f"Cannot read package {args.archive}: {e}")
        return 1
    
    print_listing(listing)
    
    if args.json:
        save_json(listing, args.json)
    
    return 0


if __name__ == '__main__':
    sys.exit(main())
