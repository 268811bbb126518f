"""
Tests for the archive dispatcher.
"""

import os
import shutil
import subprocess
import zipfile

import pytest

from getnew.errors import ExtractionError, NoArchiveFoundError
from getnew.logger import get_logger
from getnew.unarchive import archive_extension, command_for, find_archive, try_extract


class FakeInvoker:
    """Records commands instead of running them."""

    def __init__(self, error=None, create=None):
        self.calls = []
        self.error = error
        self.create = create

    def __call__(self, argv, cwd):
        self.calls.append((list(argv), cwd))
        if self.error is not None:
            raise self.error
        if self.create:
            (cwd / self.create).write_text("extracted")


class TestCommandFor:
    """Test extension to tool mapping."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("a.zip", ("unzip", "a.zip")),
            ("a.tar.gz", ("tar", "-xzf", "a.tar.gz")),
            ("a.tgz", ("tar", "-xzf", "a.tgz")),
            ("a.tar", ("tar", "-xf", "a.tar")),
            ("a.7z", ("7z", "x", "a.7z")),
            ("SHOUTY.ZIP", ("unzip", "SHOUTY.ZIP")),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert command_for(name) == expected

    @pytest.mark.parametrize("name", ["notes.txt", "README", "zip", "archive.zip.part"])
    def test_unknown_extensions(self, name):
        assert command_for(name) is None

    def test_dash_name_is_not_an_option(self):
        """A leading dash gets a ./ prefix so the tool sees a path."""
        assert command_for("-d.zip") == ("unzip", os.path.join(".", "-d.zip"))
        assert command_for("-x.tar") == ("tar", "-xf", os.path.join(".", "-x.tar"))

    def test_extension_is_from_last_dot(self):
        assert archive_extension("photo.backup.TGZ") == ".tgz"
        assert archive_extension("noext") == ""


class TestFindArchive:
    """Test scanning the current directory."""

    def test_first_match_in_name_order(self, work_dir):
        for name in ["z.zip", "b.tar", "notes.txt"]:
            (work_dir / name).write_text("x")
        assert find_archive(work_dir) == "b.tar"

    def test_skips_directories(self, work_dir):
        (work_dir / "a.zip").mkdir()
        (work_dir / "b.7z").write_text("x")
        assert find_archive(work_dir) == "b.7z"

    def test_nothing_found(self, work_dir):
        (work_dir / "notes.txt").write_text("x")
        assert find_archive(work_dir) is None


class TestTryExtract:
    """Test running the tool and cleaning up."""

    def test_runs_tool_and_removes_archive(self, work_dir):
        (work_dir / "archive.zip").write_bytes(b"PK")
        (work_dir / "notes.txt").write_text("keep me")
        invoker = FakeInvoker(create="inside.txt")

        result = try_extract(work_dir, invoker=invoker)

        assert invoker.calls == [(["unzip", "archive.zip"], work_dir)]
        assert result.archive == "archive.zip"
        assert result.command == ("unzip", "archive.zip")
        assert not (work_dir / "archive.zip").exists()
        assert (work_dir / "inside.txt").exists()
        assert (work_dir / "notes.txt").read_text() == "keep me"
        assert get_logger().get_metrics()["archives_extracted"] == 1

    def test_defaults_to_current_directory(self, work_dir):
        (work_dir / "bundle.tgz").write_bytes(b"x")
        invoker = FakeInvoker()

        try_extract(invoker=invoker)

        assert invoker.calls[0][0] == ["tar", "-xzf", "bundle.tgz"]
        assert not (work_dir / "bundle.tgz").exists()

    def test_no_archive_deletes_nothing(self, work_dir):
        (work_dir / "notes.txt").write_text("x")
        invoker = FakeInvoker()

        with pytest.raises(NoArchiveFoundError, match="no recognized archive file found"):
            try_extract(work_dir, invoker=invoker)

        assert invoker.calls == []
        assert [p.name for p in work_dir.iterdir()] == ["notes.txt"]

    def test_tool_failure_keeps_archive(self, work_dir):
        (work_dir / "broken.7z").write_bytes(b"x")
        invoker = FakeInvoker(error=subprocess.CalledProcessError(2, ["7z", "x", "broken.7z"]))

        with pytest.raises(ExtractionError) as exc_info:
            try_extract(work_dir, invoker=invoker)

        assert exc_info.value.archive == "broken.7z"
        assert exc_info.value.returncode == 2
        assert isinstance(exc_info.value.__cause__, subprocess.CalledProcessError)
        assert (work_dir / "broken.7z").exists()

    def test_missing_tool_keeps_archive(self, work_dir):
        (work_dir / "a.tar").write_bytes(b"x")
        invoker = FakeInvoker(error=FileNotFoundError(2, "No such file or directory", "tar"))

        with pytest.raises(ExtractionError, match="failed to unarchive a.tar"):
            try_extract(work_dir, invoker=invoker)

        assert (work_dir / "a.tar").exists()

    def test_dash_named_archive(self, work_dir):
        (work_dir / "-d.zip").write_bytes(b"PK")
        invoker = FakeInvoker()

        result = try_extract(work_dir, invoker=invoker)

        assert invoker.calls[0][0] == ["unzip", os.path.join(".", "-d.zip")]
        assert result.archive == "-d.zip"
        assert not (work_dir / "-d.zip").exists()

    @pytest.mark.skipif(shutil.which("unzip") is None, reason="unzip not installed")
    def test_real_unzip(self, work_dir):
        with zipfile.ZipFile(work_dir / "archive.zip", "w") as zf:
            zf.writestr("payload/readme.txt", "hello from the archive")
        (work_dir / "notes.txt").write_text("unrelated")

        result = try_extract(work_dir)

        assert result.archive == "archive.zip"
        assert not (work_dir / "archive.zip").exists()
        assert (work_dir / "payload" / "readme.txt").read_text() == "hello from the archive"
        assert (work_dir / "notes.txt").exists()
