"""Tests for entry parsing and the error taxonomy."""

from pathlib import Path

import pytest

from project_archiver.domain import (
    ArchiveEntry,
    ArchiveRequest,
    CreateError,
    DispatchError,
    EmptyPayload,
    EntryValidationError,
    InlineText,
    SourceFile,
)


class TestFromDescriptor:
    
    def test_content_becomes_inline_text(self):
        entry = ArchiveEntry.from_descriptor({"path": "a.txt", "content": "hello"})
        
        assert entry == ArchiveEntry("a.txt", InlineText("hello"))
        assert not entry.is_source_file
    
    def test_source_path_becomes_source_file(self):
        entry = ArchiveEntry.from_descriptor({"path": "media/v.mp4", "source_path": "/tmp/v.mp4"})
        
        assert entry.payload == SourceFile(Path("/tmp/v.mp4"))
        assert entry.is_source_file
    
    def test_empty_string_content_is_valid(self):
        entry = ArchiveEntry.from_descriptor({"path": "a.txt", "content": ""})
        
        assert entry.payload == InlineText("")
    
    def test_neither_payload_rejected_by_default(self):
        with pytest.raises(EntryValidationError, match="neither"):
            ArchiveEntry.from_descriptor({"path": "a.txt"})
    
    def test_neither_payload_allowed_as_empty(self):
        entry = ArchiveEntry.from_descriptor({"path": "a.txt", "content": None}, allow_empty=True)
        
        assert entry.payload == EmptyPayload()
    
    def test_both_payloads_rejected(self):
        with pytest.raises(EntryValidationError, match="both"):
            ArchiveEntry.from_descriptor({"path": "a", "content": "x", "source_path": "/x"})
    
    @pytest.mark.parametrize("descriptor", [
        {"content": "x"},
        {"path": "", "content": "x"},
        {"path": 3, "content": "x"},
        {"path": "a", "content": 3},
        {"path": "a", "source_path": ""},
        ["path", "a"],
    ])
    def test_malformed_descriptors(self, descriptor):
        with pytest.raises(EntryValidationError):
            ArchiveEntry.from_descriptor(descriptor)
    
    def test_entry_requires_archive_path(self):
        with pytest.raises(EntryValidationError):
            ArchiveEntry.text("", "x")


class TestFromPayload:
    
    def test_parses_entries_in_order(self):
        request = ArchiveRequest.from_payload({
            "destination_path": "/tmp/out.zip",
            "entries": [
                {"path": "z.txt", "content": "z"},
                {"path": "media/a.mp4", "source_path": "/media/a.mp4"},
            ],
        })
        
        assert request.destination_path == Path("/tmp/out.zip")
        assert request.archive_paths == ["z.txt", "media/a.mp4"]
        assert request.source_files == [Path("/media/a.mp4")]
    
    def test_accepts_zip_path_alias(self):
        request = ArchiveRequest.from_payload({"zip_path": "/tmp/out.zip", "entries": []})
        
        assert request.destination_path == Path("/tmp/out.zip")
        assert request.entries == ()
    
    def test_missing_destination(self):
        with pytest.raises(EntryValidationError, match="destination_path"):
            ArchiveRequest.from_payload({"entries": []})
    
    def test_entries_must_be_list(self):
        with pytest.raises(EntryValidationError, match="list"):
            ArchiveRequest.from_payload({"destination_path": "/x.zip", "entries": "a.txt"})
    
    def test_error_names_failing_entry_index(self):
        with pytest.raises(EntryValidationError) as excinfo:
            ArchiveRequest.from_payload({
                "destination_path": "/x.zip",
                "entries": [{"path": "ok", "content": ""}, {"path": "bad"}],
            })
        
        assert "entries[1]" in excinfo.value.cause
        assert excinfo.value.path == "bad"


class TestErrorMessages:
    
    def test_message_combines_kind_path_and_cause(self):
        error = CreateError(FileNotFoundError(2, "No such file or directory"), path="/x/out.zip")
        
        assert error.message.startswith("CreateError: Failed to create archive /x/out.zip: ")
        assert "No such file or directory" in error.message
        assert str(error) == error.message
    
    def test_message_without_path(self):
        error = DispatchError("executor shut down")
        
        assert error.path is None
        assert error.message == "DispatchError: Build dispatch failed: executor shut down"
