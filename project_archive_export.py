#!/usr/bin/env python3
"""
Project Archive Export.

Packs project files into a store-only ZIP package. Entries come from a JSON
request file and/or command-line options, and are written in the order given.

Usage:
    python project_archive_export.py <archive> [options]

Examples:
    # Build from a request file ({"entries": [{"path", "content"|"source_path"}]})
    python project_archive_export.py out/project.zip --request request.json
    
    # Inline text and media files from the command line
    python project_archive_export.py out/project.zip \\
        --text "transcription/transcript.txt=Hello" \\
        --file "media/video.mp4=D:/videos/video.mp4"
    
    # Verify the package and delete it if anything fails
    python project_archive_export.py out/project.zip --request request.json \\
        --verify --cleanup-on-failure
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from project_archiver.core import (
    ArchiveBuilder,
    ArchiveVerifier,
    ProjectExporter,
)
from project_archiver.domain import ArchiveEntry, ArchiveError, ArchiveRequest

logger = logging.getLogger(__name__)


def configure_logging(log_dir: Path) -> Path:
    """
    Log to console (INFO) and to a timestamped file (DEBUG).
    
    Args:
        log_dir: Directory for log files (created if missing)
        
    Returns:
        Path of the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_filename = f"project_archiver_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    log_path = log_dir / log_filename
    
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=[file_handler, console_handler],
    )
    return log_path


def format_size(bytes_size: int) -> str:
    """Format byte size to human-readable string."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.2f} PB"


def parse_pair(value: str) -> tuple[str, str]:
    """Split a NAME=VALUE option; NAME is the archive member name."""
    name, sep, rest = value.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {value!r}")
    return name, rest


def load_request(args: argparse.Namespace) -> ArchiveRequest:
    """
    Assemble the request from the request file and command-line entries.
    
    Request-file entries come first, followed by --text and --file entries
    in command-line order.
    
    Raises:
        ArchiveError: If the request file or an entry is invalid
        OSError: If the request file cannot be read
    """
    entries: list[ArchiveEntry] = []
    
    if args.request is not None:
        with open(args.request, encoding='utf-8') as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise ArchiveError(f"invalid JSON in {args.request}: {e}") from e
        if not isinstance(payload, dict):
            raise ArchiveError(f"request file must hold a JSON object: {args.request}")
        # The archive argument always names the destination
        payload = {**payload, 'destination_path': str(args.archive)}
        entries.extend(ArchiveRequest.from_payload(payload).entries)
    
    for kind, (name, value) in args.inline_entries:
        if kind == 'text':
            entries.append(ArchiveEntry.text(name, value))
        else:
            entries.append(ArchiveEntry.file(name, value))
    
    return ArchiveRequest(destination_path=args.archive, entries=tuple(entries))


class _AppendEntry(argparse.Action):
    """Collect --text and --file options into one ordered list."""
    
    def __call__(self, parser, namespace, values, option_string=None):
        collected = list(getattr(namespace, self.dest) or [])
        collected.append((self.const, values))
        setattr(namespace, self.dest, collected)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Pack project files into a store-only ZIP package',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    
    parser.add_argument(
        'archive',
        type=Path,
        help='Archive file to create (parent directory must exist)',
    )
    
    parser.add_argument(
        '--request',
        type=Path,
        default=None,
        help='JSON request file with an "entries" list',
    )
    
    parser.add_argument(
        '--text',
        dest='inline_entries',
        action=_AppendEntry,
        const='text',
        type=parse_pair,
        default=[],
        metavar='NAME=CONTENT',
        help='Add a member holding inline text (repeatable)',
    )
    
    parser.add_argument(
        '--file',
        dest='inline_entries',
        action=_AppendEntry,
        const='file',
        type=parse_pair,
        default=[],
        metavar='NAME=PATH',
        help='Add a member streamed from a file (repeatable)',
    )
    
    parser.add_argument(
        '--verify',
        action='store_true',
        help='Verify member order and CRCs after building',
    )
    
    parser.add_argument(
        '--cleanup-on-failure',
        action='store_true',
        help='Delete the archive file if the build or verification fails',
    )
    
    parser.add_argument(
        '--buffer-size',
        type=int,
        default=ArchiveBuilder.BUFFER_SIZE,
        metavar='BYTES',
        help=f'Stream-copy buffer size (default: {ArchiveBuilder.BUFFER_SIZE})',
    )
    
    parser.add_argument(
        '--log-dir',
        type=Path,
        default=Path(__file__).parent / 'logs',
        help='Directory for log files (default: ./logs next to this script)',
    )
    
    args = parser.parse_args()
    
    log_path = configure_logging(args.log_dir)
    logger.info(f"Log file: {log_path}")
    
    if args.buffer_size <= 0:
        logger.error(f"Buffer size must be positive: {args.buffer_size}")
        return 1
    
    try:
        request = load_request(args)
    except (ArchiveError, OSError) as e:
        logger.error(f"Cannot load request: {e}")
        return 1
    
    if not request.entries:
        logger.error("No entries to archive")
        return 1
    
    exporter = ProjectExporter(
        builder=ArchiveBuilder(buffer_size=args.buffer_size),
        verifier=ArchiveVerifier() if args.verify else None,
        cleanup_on_failure=args.cleanup_on_failure,
    )
    
    print(f"Archive: {request.destination_path}")
    print(f"Entries: {len(request.entries)}")
    
    result = exporter.export(request)
    
    if not result.success:
        print(f"    ❌ FAILED: {result.error_message}")
        return 1
    
    print(f"    ✓ {result.member_count} members, {format_size(result.input_size)} of content")
    print(f"    Archive size: {format_size(result.archive_size)}")
    if result.verified:
        print(f"    ✓ Verification passed")
    
    return 0


if __name__ == '__main__':
    sys.exit(main())
