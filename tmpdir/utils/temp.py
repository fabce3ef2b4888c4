"""
Temporary directory utilities.

Centralized helpers for locating the temp root and removing directory
trees. These are used across tmpdir for:

    - resolving the default base directory of new handles
    - explicit, error-reporting removal on close()
    - best-effort removal when a handle is abandoned

Only remove_tree() reports errors. The best-effort helpers never raise;
failures are logged at WARNING and otherwise unobservable.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathArg = Union[str, Path]


def default_base_dir() -> str:
    """
    Return the platform temp root (``tempfile.gettempdir()``).

    Kept as a function rather than a module constant so that TMPDIR and
    friends are honoured at call time and tests can monkeypatch it.
    """
    return tempfile.gettempdir()


def remove_tree(path: PathArg) -> None:
    """
    Remove a directory and all its contents, raising on failure.

    Parameters
    ----------
    path : str | Path
        Directory to remove.

    Raises
    ------
    OSError
        Whatever ``shutil.rmtree`` raised first.
    """
    shutil.rmtree(path)


def cleanup_temp_dir(path: Optional[PathArg]) -> None:
    """
    Remove a directory and all its contents, suppressing errors.

    Parameters
    ----------
    path : Optional[str | Path]
        Path to the directory to remove. If None, does nothing.
    """
    if not path:
        return

    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Best-effort cleanup of %s failed: %s", path, exc)


def cleanup_in_background(path: PathArg) -> None:
    """
    Schedule cleanup_temp_dir(path) on a daemon thread and return at once.

    If no thread can be started (interpreter shutdown), the removal runs
    inline instead, still without raising.
    """
    worker = threading.Thread(
        target=cleanup_temp_dir,
        args=(path,),
        name=f"tmpdir-cleanup-{Path(path).name}",
        daemon=True,
    )
    try:
        worker.start()
    except RuntimeError:
        cleanup_temp_dir(path)


__all__ = [
    "default_base_dir",
    "remove_tree",
    "cleanup_temp_dir",
    "cleanup_in_background",
]
