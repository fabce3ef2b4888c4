"""
TmpDir - an owned, uniquely named scratch directory.

A TmpDir is created under a base directory (the platform temp root unless
configured otherwise) with a name of the form ``<prefix>-<random suffix>``.
It is either "active" (the directory exists and this handle owns its
removal) or "closed" (the directory has been removed). There is no way
back from "closed".

Cleanup guarantees
------------------
Only an explicit ``close()`` (or leaving a ``with`` block) removes the
directory synchronously and reports failure, as CloseFailed.

A handle that is garbage collected while still active schedules the same
removal on a background daemon thread and returns immediately. That
removal is best-effort: nothing waits for it, its errors are only logged,
and if the process exits first the directory may be left behind.
Do not rely on it when the outcome matters.
"""

from __future__ import annotations

import logging
import os
import weakref
from pathlib import Path
from typing import Literal, Optional, Union

from .config import TmpDirConfig, load_config
from .copying import CopyEngine, CopyStats, check_not_nested, copy_tree
from .errors import (
    AlreadyClosed,
    CloseFailed,
    CopyFailed,
    CreationFailed,
    InvalidTargetState,
)
from .naming import NameGenerator
from .utils.paths import validate_prefix
from .utils.temp import cleanup_in_background, remove_tree

logger = logging.getLogger(__name__)

HandleState = Literal["active", "closed"]

PathArg = Union[str, Path]

_CREATE_TOKEN = object()


class TmpDir:
    """
    Owner of one temporary directory.

    Obtain instances through :meth:`create` only. Calling the class
    directly raises TypeError, so a handle never owns (and never removes)
    a directory it did not create itself.

    Attributes
    ----------
    config:
        TmpDirConfig the handle was created with; supplies the default
        copy concurrency.
    """

    def __init__(
        self,
        path: PathArg,
        config: Optional[TmpDirConfig] = None,
        *,
        _token: object = None,
    ) -> None:
        if _token is not _CREATE_TOKEN:
            raise TypeError("TmpDir instances are made with TmpDir.create()")
        self._path = Path(os.path.abspath(path))
        self._state: HandleState = "active"
        self.config = config or TmpDirConfig()
        self._finalizer = weakref.finalize(self, cleanup_in_background, str(self._path))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        prefix: str,
        base_dir: Optional[PathArg] = None,
        *,
        config: Optional[TmpDirConfig] = None,
        names: Optional[NameGenerator] = None,
    ) -> "TmpDir":
        """
        Create ``<base_dir>/<prefix>-<suffix>`` and return an active handle.

        Parameters
        ----------
        prefix : str
            Human-readable part of the name. Must not contain a path
            separator.
        base_dir : Optional[str | Path]
            Parent directory. Overrides ``config.base_dir``; when both are
            unset the platform temp root is used. It must already exist.
        config : Optional[TmpDirConfig]
            Defaults to ``load_config()``.
        names : Optional[NameGenerator]
            Source of candidate paths. Defaults to a NameGenerator with
            ``config.suffix_length``.

        Raises
        ------
        CreationFailed
            If a candidate could not be created for a reason other than
            "already exists", or if ``config.max_attempts`` candidates in a
            row already existed.
        ValueError
            If ``prefix`` is not a valid single path component.
        """
        cfg = config or load_config()

        if cfg.enable_logging:
            logging.basicConfig(level=logging.INFO)

        validate_prefix(prefix)
        root = os.path.abspath(base_dir) if base_dir is not None else cfg.resolve_base_dir()
        names = names or NameGenerator(cfg.suffix_length)

        for attempt in range(1, cfg.max_attempts + 1):
            candidate = names.candidate(root, prefix)
            try:
                os.mkdir(candidate, 0o700)
            except FileExistsError:
                logger.debug(
                    "Temp dir name %s already taken (attempt %d/%d)",
                    candidate, attempt, cfg.max_attempts,
                )
                continue
            except OSError as exc:
                raise CreationFailed(exc, attempts=attempt, base_dir=root) from exc

            logger.info("Created temp dir %s", candidate)
            return cls(candidate, cfg, _token=_CREATE_TOKEN)

        logger.warning(
            "Giving up creating %r temp dir under %s after %d name collisions",
            prefix, root, cfg.max_attempts,
        )
        raise CreationFailed(attempts=cfg.max_attempts, base_dir=root)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """
        The owned directory. Available in either state, but once the
        handle is closed the path no longer exists.
        """
        return self._path

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state == "closed"

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def copy(self, source: PathArg, *, workers: Optional[int] = None) -> CopyStats:
        """
        Copy the contents of ``source`` into this directory.

        See :func:`tmpdir.copying.copy_tree` for the full contract.
        """
        return copy_tree(self, source, workers=workers)

    def copy_to(self, dest_dir: PathArg, *, workers: Optional[int] = None) -> CopyStats:
        """
        Copy the contents of this directory into ``dest_dir``.

        ``dest_dir`` (and any missing parents) is created first. Symlinks
        are skipped and the first error aborts, exactly as for copy().

        Raises
        ------
        CopyFailed
            With an InvalidTargetState cause if this handle is closed, or
            with the underlying OSError for the entry that failed.
        """
        if self.closed:
            raise CopyFailed(self._path, InvalidTargetState(self._path, self._state))

        dest = Path(dest_dir)
        check_not_nested(self._path, dest)
        try:
            os.makedirs(dest, exist_ok=True)
        except OSError as exc:
            raise CopyFailed(dest, exc) from exc

        if workers is None:
            workers = self.config.copy_workers
        engine = CopyEngine(workers)
        return engine.run(self._path, dest)

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Remove the directory and everything in it, then mark the handle closed.

        Raises
        ------
        AlreadyClosed
            If the handle was closed before.
        CloseFailed
            If removal failed. The handle stays active so close() can be
            retried; some contents may already be gone.
        """
        if self._state == "closed":
            raise AlreadyClosed(self._path)

        try:
            remove_tree(self._path)
        except FileNotFoundError as exc:
            if os.path.lexists(self._path):
                raise CloseFailed(self._path, exc) from exc
            logger.debug("Temp dir %s was already removed", self._path)
        except OSError as exc:
            raise CloseFailed(self._path, exc) from exc

        self._state = "closed"
        self._finalizer.detach()
        logger.info("Closed temp dir %s", self._path)

    def __enter__(self) -> "TmpDir":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.closed:
            self.close()

    # ------------------------------------------------------------------
    # Path-like behaviour
    # ------------------------------------------------------------------

    def __fspath__(self) -> str:
        return str(self._path)

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"TmpDir(path={str(self._path)!r}, state={self._state!r})"


__all__ = ["HandleState", "TmpDir"]
