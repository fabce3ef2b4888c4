"""Shared fixtures for the tmpdir test suite."""

import os
from pathlib import Path

import pytest

from tmpdir import NameGenerator, TmpDirConfig


requires_symlinks = pytest.mark.skipif(
    not hasattr(os, "symlink") or os.name == "nt",
    reason="symlinks not available on this platform",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TMPDIR_* settings from the outer environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("TMPDIR_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_dir(tmp_path):
    """Sandbox directory handles are created under."""
    path = tmp_path / "base"
    path.mkdir()
    return path


@pytest.fixture
def config(base_dir):
    return TmpDirConfig(base_dir=str(base_dir))


@pytest.fixture
def source_tree(tmp_path):
    """
    src/a.txt      = "hello"
    src/sub/b.txt  = "world"
    src/link       -> a.txt   (only where symlinks are supported)
    """
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("hello")
    (src / "sub" / "b.txt").write_text("world")
    if hasattr(os, "symlink") and os.name != "nt":
        os.symlink("a.txt", src / "link")
    return src


class ScriptedNames(NameGenerator):
    """NameGenerator that hands out a fixed sequence of suffixes."""

    def __init__(self, suffixes):
        super().__init__()
        self._suffixes = iter(suffixes)
        self.calls = 0

    def suffix(self):
        self.calls += 1
        return next(self._suffixes)


def snapshot(root):
    """Map every relative path under root to its bytes (files) or None (dirs)."""
    root = Path(root)
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames:
            full = Path(dirpath) / name
            if not full.is_symlink():
                result[full.relative_to(root).as_posix()] = None
        for name in filenames:
            full = Path(dirpath) / name
            if not full.is_symlink():
                result[full.relative_to(root).as_posix()] = full.read_bytes()
    return result
