"""Tests for the archive-export command."""

import asyncio
import json
import threading
import zipfile

import pytest

from project_archiver import (
    ARCHIVE_EXPORT_COMMAND,
    ArchiveBuilder,
    BuildDispatcher,
    archive_export,
)
from project_archiver.commands import COMMANDS


def run(payload, dispatcher=None):
    return asyncio.run(archive_export(payload, dispatcher))


def test_command_is_registered_by_name():
    assert ARCHIVE_EXPORT_COMMAND == "archive-export"
    assert COMMANDS[ARCHIVE_EXPORT_COMMAND] is archive_export


def test_success_returns_none(destination, make_source, random_bytes):
    media = random_bytes(10 * 1024 * 1024)
    source = make_source("b.bin", media)
    
    result = run({
        "destination_path": str(destination),
        "entries": [
            {"path": "a.txt", "content": "hello"},
            {"path": "media/b.bin", "source_path": str(source)},
        ],
    })
    
    assert result is None
    with zipfile.ZipFile(destination) as archive:
        assert archive.namelist() == ["a.txt", "media/b.bin"]
        assert archive.read("a.txt") == b"hello"
        assert archive.read("media/b.bin") == media


def test_missing_source_returns_message(destination, tmp_path):
    missing = tmp_path / "gone.mp4"
    
    message = run({
        "destination_path": str(destination),
        "entries": [{"path": "media/gone.mp4", "source_path": str(missing)}],
    })
    
    assert message.startswith("SourceOpenError: Failed to open source ")
    assert str(missing) in message


def test_missing_parent_returns_create_error(tmp_path):
    message = run({
        "destination_path": str(tmp_path / "no-such-dir" / "p.zip"),
        "entries": [{"path": "a.txt", "content": "a"}],
    })
    
    assert message.startswith("CreateError:")
    assert not (tmp_path / "no-such-dir").exists()


def test_invalid_entry_returns_message_without_writing(destination):
    message = run({
        "destination_path": str(destination),
        "entries": [{"path": "a.txt"}],
    })
    
    assert message.startswith("EntryValidationError:")
    assert not destination.exists()


def test_shared_dispatcher_is_left_running(destination):
    with BuildDispatcher() as dispatcher:
        first = run({"destination_path": str(destination), "entries": []}, dispatcher)
        second = run(
            {"destination_path": str(destination), "entries": [{"path": "a", "content": "a"}]},
            dispatcher,
        )
    
    assert first is None
    assert second is None
    with zipfile.ZipFile(destination) as archive:
        assert archive.namelist() == ["a"]


def test_shut_down_dispatcher_returns_dispatch_error(destination):
    dispatcher = BuildDispatcher()
    dispatcher.shutdown()
    
    message = run({"destination_path": str(destination), "entries": []}, dispatcher)
    
    assert message.startswith("DispatchError:")


def test_unencodable_content_returns_write_error(destination):
    message = run(json.loads(
        '{"destination_path": %s, "entries": ['
        '{"path": "a.txt", "content": "ok"}, {"path": "b.txt", "content": "\\ud800"}]}'
        % json.dumps(str(destination))
    ))
    
    assert message.startswith("WriteError:")
    with zipfile.ZipFile(destination) as archive:
        assert archive.namelist() == ["a.txt"]


def test_cancelled_command_does_not_stall_loop(destination, make_source, monkeypatch):
    source = make_source("v.mp4", b"video")
    started = threading.Event()
    release = threading.Event()
    copy_source = ArchiveBuilder._copy_source
    
    def slow_copy(self, *args):
        started.set()
        release.wait(5)
        return copy_source(self, *args)
    
    monkeypatch.setattr(ArchiveBuilder, '_copy_source', slow_copy)
    
    async def scenario():
        loop = asyncio.get_running_loop()
        task = asyncio.create_task(archive_export({
            "destination_path": str(destination),
            "entries": [{"path": "media/v.mp4", "source_path": str(source)}],
        }))
        while not started.is_set():
            await asyncio.sleep(0.01)
        
        task.cancel()
        cancelled_at = loop.time()
        with pytest.raises(asyncio.CancelledError):
            await task
        return loop.time() - cancelled_at
    
    try:
        stall = asyncio.run(scenario())
    finally:
        release.set()
    
    assert stall < 1.0
