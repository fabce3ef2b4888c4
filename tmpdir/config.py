"""
Global configuration settings for tmpdir.

This module centralizes configuration for:

    - the base directory new handles are created under
    - name generation (suffix length, collision retries)
    - copy concurrency
    - feature flags (logging, etc.)

It provides:
    TmpDirConfig   – structured config object
    load_config()  – load from environment variables or defaults
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from .utils.temp import default_base_dir


DEFAULT_SUFFIX_LENGTH = 10
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_COPY_WORKERS = 1


@dataclass
class TmpDirConfig:
    """
    Canonical configuration for tmpdir handles and copies.

    Attributes
    ----------
    base_dir:
        Directory new handles are created directly under. None means the
        platform temp root, discovered when the handle is created.

    suffix_length:
        Number of random alphanumeric characters appended to the prefix.

    max_attempts:
        How many candidate names are tried before creation gives up
        because every one of them already existed.

    copy_workers:
        Upper bound on concurrent sibling copies. 1 copies sequentially.

    enable_logging:
        Whether to enable internal info logging.
    """

    base_dir: Optional[str] = None

    suffix_length: int = DEFAULT_SUFFIX_LENGTH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    copy_workers: int = DEFAULT_COPY_WORKERS

    enable_logging: bool = False

    def __post_init__(self) -> None:
        for name in ("suffix_length", "max_attempts", "copy_workers"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value!r}")

    def resolve_base_dir(self) -> str:
        """Return the absolute base directory, falling back to the temp root."""
        if self.base_dir:
            return os.path.abspath(self.base_dir)
        return default_base_dir()


def load_config() -> TmpDirConfig:
    """
    Load TmpDirConfig from environment variables, falling back to defaults.

    Recognized variables:
        TMPDIR_BASE_DIR         (directory path)
        TMPDIR_SUFFIX_LENGTH    (positive integer)
        TMPDIR_MAX_ATTEMPTS     (positive integer)
        TMPDIR_COPY_WORKERS     (positive integer)
        TMPDIR_ENABLE_LOGGING   ("true" / "false" / "1" / "0")

    Returns
    -------
    TmpDirConfig

    Raises
    ------
    ValueError
        If an integer variable is set to something that is not an integer.
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    def _env_int(name: str, default: int) -> int:
        val = os.getenv(name)
        if val is None or not val.strip():
            return default
        try:
            return int(val.strip())
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {val!r}") from None

    return TmpDirConfig(
        base_dir=os.getenv("TMPDIR_BASE_DIR") or None,

        suffix_length=_env_int(
            "TMPDIR_SUFFIX_LENGTH",
            DEFAULT_SUFFIX_LENGTH
        ),
        max_attempts=_env_int(
            "TMPDIR_MAX_ATTEMPTS",
            DEFAULT_MAX_ATTEMPTS
        ),
        copy_workers=_env_int(
            "TMPDIR_COPY_WORKERS",
            DEFAULT_COPY_WORKERS
        ),

        enable_logging=_env_flag(
            "TMPDIR_ENABLE_LOGGING",
            default=False
        ),
    )
