"""
Path-building utilities for handle names.

These helpers produce deterministic, normalized paths so that every
handle directory lands where expected.
"""

from __future__ import annotations

import os


# ----------------------------------------------------------------------
# Handle names
# ----------------------------------------------------------------------

def validate_prefix(prefix: str) -> str:
    """
    Check that a prefix can form a single path component.

    An empty prefix is allowed and yields names like "-Ab3dE9xYz0".

    Raises
    ------
    ValueError
        If the prefix contains a path separator or a NUL byte.
    """
    seps = {os.sep, "/"}
    if os.altsep:
        seps.add(os.altsep)
    if "\0" in prefix or any(sep in prefix for sep in seps):
        raise ValueError(f"Invalid directory prefix: {prefix!r}")
    return prefix


def build_dir_name(prefix: str, suffix: str) -> str:
    """
    Directory name for a handle.

    Example:
        prefix = "build", suffix = "Ab3dE9xYz0"
        -> "build-Ab3dE9xYz0"
    """
    return f"{prefix}-{suffix}"


__all__ = [
    "validate_prefix",
    "build_dir_name",
]
