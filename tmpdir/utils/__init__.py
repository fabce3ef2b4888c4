"""
tmpdir.utils

Lightweight utility helpers shared across the tmpdir package.

This package aggregates:

    - temp:   temp-root discovery and tree removal
    - paths:  handle-name and copy-destination builders

All public symbols from these modules are re-exported for convenience.
"""

from . import temp
from . import paths

# Re-export all public symbols from the submodules
from .temp import *        # noqa: F401,F403
from .paths import *       # noqa: F401,F403

__all__ = (
    temp.__all__
    + paths.__all__
)
