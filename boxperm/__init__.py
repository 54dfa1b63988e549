"""
boxperm package

Permutation / rotation enumerator for 3D container loading searches.

The package exposes a small, stable surface:
- __version__: package version string
- get_version(): helper to retrieve the version

The computational core lives in `boxperm.rotations` (orientation building and
bound filtering) and `boxperm.iterator` (the permutation/rotation cursors and
counters). `boxperm.api` wraps it with FastAPI. Keep this file minimal to avoid
import-time side-effects.
"""

from typing import Final

__all__ = ["__version__", "get_version"]

__version__: Final[str] = "0.1.0"


def get_version() -> str:
    """
    Return the package version.

    Use this from external code to check the installed enumerator version.
    """
    return __version__
