"""
Pytest configuration and shared fixtures.
"""

import os
import pytest
from pathlib import Path
from typing import Dict

from getnew.logger import get_logger, reset_logger

BASE_TIME = 1_700_000_000


def _make_file(directory: Path, name: str, mtime: float, content: bytes = b"") -> Path:
    path = directory / name
    path.write_bytes(content or name.encode("utf-8"))
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_file():
    """Factory creating a file with fixed contents and modification time."""
    return _make_file


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger per test, console only at WARNING."""
    reset_logger()
    get_logger(enable_console=True)
    yield
    reset_logger()


@pytest.fixture
def source_dir(tmp_path) -> Path:
    """Empty source directory."""
    directory = tmp_path / "source"
    directory.mkdir()
    return directory


@pytest.fixture
def work_dir(tmp_path, monkeypatch) -> Path:
    """Empty directory that is also the current working directory."""
    directory = tmp_path / "work"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory


@pytest.fixture
def example_files(source_dir) -> Dict[str, Path]:
    """a.txt (older), b.log (newest), c.txt (middle), plus a directory."""
    (source_dir / "newest_dir").mkdir()
    os.utime(source_dir / "newest_dir", (BASE_TIME + 1000, BASE_TIME + 1000))
    return {
        "a.txt": _make_file(source_dir, "a.txt", BASE_TIME),
        "b.log": _make_file(source_dir, "b.log", BASE_TIME + 200),
        "c.txt": _make_file(source_dir, "c.txt", BASE_TIME + 100),
    }
