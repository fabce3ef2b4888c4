"""Tests for tmpdir.utils path and removal helpers."""

import os
import threading

import pytest

from tmpdir.utils import (
    build_dir_name,
    cleanup_in_background,
    cleanup_temp_dir,
    remove_tree,
    validate_prefix,
)
import tmpdir.utils.temp as temp


class TestPaths:
    def test_build_dir_name(self):
        assert build_dir_name("build", "Ab3dE9xYz0") == "build-Ab3dE9xYz0"

    def test_validate_prefix_accepts_plain_names(self):
        assert validate_prefix("my.job_1") == "my.job_1"

    def test_validate_prefix_rejects_separator(self):
        with pytest.raises(ValueError):
            validate_prefix(f"a{os.sep}b")


class TestRemoval:
    def test_remove_tree_raises_for_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            remove_tree(tmp_path / "missing")

    def test_cleanup_temp_dir_ignores_missing_and_none(self, tmp_path):
        cleanup_temp_dir(None)
        cleanup_temp_dir(tmp_path / "missing")

    def test_cleanup_temp_dir_logs_failures(self, tmp_path, monkeypatch, caplog):
        def broken(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(temp.shutil, "rmtree", broken)

        with caplog.at_level("WARNING", logger="tmpdir.utils.temp"):
            cleanup_temp_dir(tmp_path)

        assert "Best-effort cleanup" in caplog.text

    def test_cleanup_in_background_removes_tree(self, tmp_path, monkeypatch):
        target = tmp_path / "doomed"
        (target / "inner").mkdir(parents=True)
        done = threading.Event()
        real = temp.cleanup_temp_dir

        def tracked(path):
            real(path)
            done.set()

        monkeypatch.setattr(temp, "cleanup_temp_dir", tracked)
        cleanup_in_background(target)

        assert done.wait(5)
        assert not target.exists()

    def test_cleanup_in_background_falls_back_inline(self, tmp_path, monkeypatch):
        target = tmp_path / "doomed"
        target.mkdir()

        def refuse(self):
            raise RuntimeError("can't create new thread at interpreter shutdown")

        monkeypatch.setattr(temp.threading.Thread, "start", refuse)
        cleanup_in_background(target)

        assert not target.exists()
