"""
Exception types raised by tmpdir.

Every failure of create / copy / close is reported through one of these.
The underlying OSError (when there is one) is available as ``.cause`` and
is also chained as ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathArg = Union[str, Path]


class TmpDirError(Exception):
    """Base class for all tmpdir errors."""


class CreationFailed(TmpDirError):
    """
    A handle directory could not be created.

    Either a non-collision I/O error occurred (``cause`` is set), or every
    one of ``attempts`` generated names already existed (``cause`` is None).
    """

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        *,
        attempts: int = 0,
        base_dir: Optional[PathArg] = None,
    ) -> None:
        self.cause = cause
        self.attempts = attempts
        self.base_dir = base_dir
        if cause is not None:
            msg = f"could not create temp dir under {base_dir}: {cause}"
        else:
            msg = (
                f"could not create temp dir under {base_dir}: "
                f"all {attempts} candidate names already existed"
            )
        super().__init__(msg)


class CopyFailed(TmpDirError):
    """A copy aborted at ``path``. Entries written before it are left in place."""

    def __init__(self, path: PathArg, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"copy failed at {self.path}: {cause}")


class CloseFailed(TmpDirError):
    """Removing the handle directory failed. The handle is still active."""

    def __init__(self, path: PathArg, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"could not remove {self.path}: {cause}")


class AlreadyClosed(TmpDirError):
    """close() was called on a handle that is already closed."""

    def __init__(self, path: PathArg) -> None:
        self.path = Path(path)
        super().__init__(f"temp dir {self.path} is already closed")


class InvalidTargetState(TmpDirError):
    """A closed handle was used as a copy target or source."""

    def __init__(self, path: PathArg, state: str) -> None:
        self.path = Path(path)
        self.state = state
        super().__init__(f"invalid target state: {self.path} is {state}")


__all__ = [
    "TmpDirError",
    "CreationFailed",
    "CopyFailed",
    "CloseFailed",
    "AlreadyClosed",
    "InvalidTargetState",
]
