"""Shared fixtures for archive tests."""

import os

import pytest


@pytest.fixture
def make_source(tmp_path):
    """Write a source file and return its path."""
    
    def _make(name: str, data: bytes):
        path = tmp_path / "sources" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
    
    return _make


@pytest.fixture
def random_bytes():
    """Random content of a given length."""
    return os.urandom


@pytest.fixture
def destination(tmp_path):
    return tmp_path / "out" / "project.zip"


@pytest.fixture(autouse=True)
def _out_dir(tmp_path):
    (tmp_path / "out").mkdir()
