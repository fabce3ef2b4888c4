"""
Candidate name generation for handle directories.

Names look like ``<base>/<prefix>-<suffix>`` where the suffix is drawn
from the 62-character alphanumeric alphabet. With the default length of
10 that is 62**10 (about 8.4e17) possibilities, but no generator is
assumed collision-free: TmpDir.create retries on "already exists".
"""

from __future__ import annotations

import os
import secrets
import string
from typing import Callable, Sequence

from .config import DEFAULT_SUFFIX_LENGTH
from .utils.paths import build_dir_name, validate_prefix

ALPHANUMERIC = string.ascii_letters + string.digits


class NameGenerator:
    """
    Produces random candidate paths for a prefix and base directory.

    Parameters
    ----------
    length : int
        Number of random characters in the suffix.
    choice : Callable[[Sequence[str]], str]
        Picks one character from the alphabet. Defaults to
        ``secrets.choice``; inject a seeded ``random.Random().choice``
        for reproducible names.
    """

    def __init__(
        self,
        length: int = DEFAULT_SUFFIX_LENGTH,
        choice: Callable[[Sequence[str]], str] = secrets.choice,
    ) -> None:
        if length < 1:
            raise ValueError(f"suffix length must be >= 1, got {length!r}")
        self.length = length
        self._choice = choice

    def suffix(self) -> str:
        """Return a fresh random suffix."""
        return "".join(self._choice(ALPHANUMERIC) for _ in range(self.length))

    def candidate(self, base_dir: str, prefix: str) -> str:
        """Return ``<base_dir>/<prefix>-<suffix>`` with a fresh suffix."""
        validate_prefix(prefix)
        return os.path.join(base_dir, build_dir_name(prefix, self.suffix()))

    def __repr__(self) -> str:
        return f"NameGenerator(length={self.length})"


__all__ = ["ALPHANUMERIC", "NameGenerator"]
