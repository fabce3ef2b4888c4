"""
Recursive, symlink-excluding directory copy.

CopyEngine mirrors the regular files and directories of a source tree into
a destination directory:

    - symbolic links are skipped (never followed, never recreated)
    - devices, sockets and FIFOs are skipped
    - file bytes are copied verbatim; permissions and timestamps are not
    - the first error aborts the copy (fail-fast)

The copy is not transactional. Whatever was written before a failure stays
on disk; callers that need all-or-nothing semantics copy into a fresh
TmpDir and only move it into place once copy() returned.

Traversal uses an explicit stack of (source_dir, dest_dir) pairs, so very
deep trees do not hit the recursion limit.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Set, Tuple, Union

from .errors import CopyFailed, InvalidTargetState

if TYPE_CHECKING:
    from .handle import TmpDir

logger = logging.getLogger(__name__)

PathArg = Union[str, Path]


@dataclass
class CopyStats:
    """
    Summary of a completed copy.

    Attributes
    ----------
    files:
        Regular files copied.
    directories:
        Directories created below the destination root.
    skipped:
        Symlinks and special files left out.
    """

    files: int = 0
    directories: int = 0
    skipped: int = 0


class CopyEngine:
    """
    Copies the contents of one directory into another.

    Parameters
    ----------
    workers : int
        Maximum number of file copies in flight at once. With 1 (the
        default) entries are copied one by one, in name order within
        each directory.
    """

    def __init__(self, workers: int = 1) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers!r}")
        self.workers = workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, source: PathArg, dest: PathArg) -> CopyStats:
        """
        Copy everything under ``source`` into the existing directory ``dest``.

        Raises
        ------
        CopyFailed
            On the first read, stat or write error, or when ``dest`` lies
            inside ``source``.
        """
        source = Path(source)
        dest = Path(dest)
        check_not_nested(source, dest)

        stats = CopyStats()
        if self.workers == 1:
            self._run_sequential(source, dest, stats)
        else:
            self._run_parallel(source, dest, stats)

        logger.debug(
            "Copied %s -> %s (%d files, %d dirs, %d skipped)",
            source, dest, stats.files, stats.directories, stats.skipped,
        )
        return stats

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _run_sequential(self, source: Path, dest: Path, stats: CopyStats) -> None:
        stack: List[Tuple[Path, Path]] = [(source, dest)]
        while stack:
            src_dir, dst_dir = stack.pop()
            files, subdirs = self._plan_directory(src_dir, dst_dir, stats)
            for src, dst in files:
                self._copy_file(src, dst)
                stats.files += 1
            stack.extend(reversed(subdirs))

    def _run_parallel(self, source: Path, dest: Path, stats: CopyStats) -> None:
        stack: List[Tuple[Path, Path]] = [(source, dest)]
        pending: Set[Future] = set()

        with ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="tmpdir-copy",
        ) as pool:
            try:
                while stack:
                    stats.files += self._collect(pending, block=False)
                    src_dir, dst_dir = stack.pop()
                    files, subdirs = self._plan_directory(src_dir, dst_dir, stats)
                    for src, dst in files:
                        pending.add(pool.submit(self._copy_file, src, dst))
                    stack.extend(reversed(subdirs))

                while pending:
                    stats.files += self._collect(pending, block=True)
            except BaseException:
                for fut in pending:
                    fut.cancel()
                raise

    @staticmethod
    def _collect(pending: Set[Future], block: bool) -> int:
        """
        Remove finished futures from ``pending`` and return how many succeeded.

        Re-raises the first failure found. With ``block`` it waits until at
        least one future finishes or one fails.
        """
        if block:
            done, _ = wait(pending, return_when=FIRST_EXCEPTION)
        else:
            done = {fut for fut in pending if fut.done()}

        ok = 0
        for fut in done:
            pending.discard(fut)
            if fut.cancelled():
                continue
            exc = fut.exception()
            if exc is not None:
                raise exc
            ok += 1
        return ok

    def _plan_directory(
        self,
        src_dir: Path,
        dst_dir: Path,
        stats: CopyStats,
    ) -> Tuple[List[Tuple[Path, Path]], List[Tuple[Path, Path]]]:
        """
        List ``src_dir``, create its subdirectories under ``dst_dir`` and
        return the (files, subdirectories) still to be handled.
        """
        try:
            with os.scandir(src_dir) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            raise CopyFailed(src_dir, exc) from exc

        files: List[Tuple[Path, Path]] = []
        subdirs: List[Tuple[Path, Path]] = []

        for entry in entries:
            src = Path(entry.path)
            dst = dst_dir / entry.name
            try:
                is_link = entry.is_symlink()
                is_dir = not is_link and entry.is_dir(follow_symlinks=False)
                is_file = not is_link and entry.is_file(follow_symlinks=False)
            except OSError as exc:
                raise CopyFailed(src, exc) from exc

            if is_link:
                logger.debug("Skipping symlink %s", src)
                stats.skipped += 1
            elif is_dir:
                self._make_dir(src, dst)
                stats.directories += 1
                subdirs.append((src, dst))
            elif is_file:
                files.append((src, dst))
            else:
                logger.debug("Skipping special file %s", src)
                stats.skipped += 1

        return files, subdirs

    # ------------------------------------------------------------------
    # Per-entry operations
    # ------------------------------------------------------------------

    @staticmethod
    def _make_dir(src: Path, dst: Path) -> None:
        _refuse_symlink(dst)
        try:
            os.makedirs(dst, exist_ok=True)
        except OSError as exc:
            raise CopyFailed(src, exc) from exc

    @staticmethod
    def _copy_file(src: Path, dst: Path) -> None:
        _refuse_symlink(dst)
        try:
            shutil.copyfile(src, dst, follow_symlinks=False)
        except OSError as exc:
            raise CopyFailed(src, exc) from exc


def _refuse_symlink(dst: Path) -> None:
    """Raise CopyFailed if ``dst`` is a symlink, so writes never leave the destination."""
    if os.path.islink(dst):
        raise CopyFailed(
            dst,
            FileExistsError(errno.EEXIST, "destination entry is a symlink", str(dst)),
        )


def check_not_nested(source: PathArg, dest: PathArg) -> None:
    """
    Raise CopyFailed if ``dest`` is ``source`` or lies anywhere below it.

    Both paths are resolved first, so symlinked spellings are caught too.
    """
    src_real = os.path.realpath(source)
    dst_real = os.path.realpath(dest)
    try:
        nested = os.path.commonpath([src_real, dst_real]) == src_real
    except ValueError:
        # different drives
        nested = False
    if nested:
        raise CopyFailed(
            dest,
            ValueError(f"destination {dest} is inside source {source}"),
        )


# ----------------------------------------------------------------------
# Handle-level entry point
# ----------------------------------------------------------------------

def copy_tree(
    destination: "TmpDir",
    source: PathArg,
    *,
    workers: Optional[int] = None,
) -> CopyStats:
    """
    Copy the contents of ``source`` into an active TmpDir.

    Parameters
    ----------
    destination : TmpDir
        Target handle. Must not be closed.
    source : str | Path
        Directory whose contents are copied. The directory itself is
        followed even if it is a symlink; nothing below it is.
    workers : Optional[int]
        Concurrency bound. Defaults to the handle's configured copy_workers.

    Raises
    ------
    CopyFailed
        With an InvalidTargetState cause if ``destination`` is closed, or
        with the underlying OSError for the first entry that failed.
    """
    if destination.closed:
        raise CopyFailed(
            destination.path,
            InvalidTargetState(destination.path, destination.state),
        )

    if workers is None:
        workers = destination.config.copy_workers
    engine = CopyEngine(workers)
    return engine.run(source, destination.path)


__all__ = ["CopyEngine", "CopyStats", "check_not_nested", "copy_tree"]
