"""Tests for ProjectExporter."""

from project_archiver.core import ArchiveVerifier, ProjectExporter
from project_archiver.core.builder import BuildStats
from project_archiver.domain import ArchiveEntry, ArchiveRequest


class NullBuilder:
    """Builder that reports success without writing anything."""
    
    def build(self, destination_path, entries):
        destination_path.write_bytes(b"")
        return BuildStats(archive_path=destination_path, member_count=len(list(entries)))


def test_export_with_verification(destination):
    request = ArchiveRequest(destination, (ArchiveEntry.text("a.txt", "hello"),))
    
    result = ProjectExporter(verifier=ArchiveVerifier()).export(request)
    
    assert result.success
    assert result.verified
    assert result.member_count == 1
    assert result.input_size == 5
    assert result.archive_size == destination.stat().st_size


def test_failed_build_keeps_partial_file_by_default(destination, tmp_path):
    request = ArchiveRequest(destination, (
        ArchiveEntry.text("a.txt", "a"),
        ArchiveEntry.file("b.bin", tmp_path / "missing.bin"),
    ))
    
    result = ProjectExporter().export(request)
    
    assert not result.success
    assert result.error_message.startswith("SourceOpenError:")
    assert destination.exists()


def test_failed_build_cleanup(destination, tmp_path):
    request = ArchiveRequest(destination, (ArchiveEntry.file("b.bin", tmp_path / "missing.bin"),))
    
    result = ProjectExporter(cleanup_on_failure=True).export(request)
    
    assert not result.success
    assert not destination.exists()


def test_failed_verification_is_reported(destination):
    request = ArchiveRequest(destination, (ArchiveEntry.text("a.txt", "a"),))
    exporter = ProjectExporter(
        builder=NullBuilder(),
        verifier=ArchiveVerifier(),
        cleanup_on_failure=True,
    )
    
    result = exporter.export(request)
    
    assert not result.success
    assert result.error_message.startswith("VerificationError:")
    assert not destination.exists()
