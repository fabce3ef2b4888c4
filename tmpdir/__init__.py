"""
tmpdir

Uniquely named temporary directories whose contents can be copied out on
completion of some action, and which are removed when no longer needed.

    with TmpDir.create("build") as tmp:
        ...                      # write into tmp.path
        tmp.copy_to("/srv/out")  # commit
    # tmp.path no longer exists

Submodules:
    - handle:   TmpDir lifecycle (create / close / abandonment cleanup)
    - copying:  recursive, symlink-excluding copy
    - naming:   random candidate names
    - config:   TmpDirConfig and load_config()
    - errors:   exception types
    - utils/
"""

from .config import TmpDirConfig, load_config
from .copying import CopyEngine, CopyStats, copy_tree
from .errors import (
    AlreadyClosed,
    CloseFailed,
    CopyFailed,
    CreationFailed,
    InvalidTargetState,
    TmpDirError,
)
from .handle import HandleState, TmpDir
from .naming import NameGenerator

__all__ = [
    "TmpDir",
    "HandleState",
    "NameGenerator",
    "CopyEngine",
    "CopyStats",
    "copy_tree",
    "TmpDirConfig",
    "load_config",
    "TmpDirError",
    "CreationFailed",
    "CopyFailed",
    "CloseFailed",
    "AlreadyClosed",
    "InvalidTargetState",
]
