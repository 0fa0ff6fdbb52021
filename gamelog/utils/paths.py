"""Centralized path resolution for bundled resources.

Provides a single source of truth for locating the resources directory
(translation files and the platform compatibility table), whether running
from a source checkout or from an installed package.
"""

from __future__ import annotations

import sys
from pathlib import Path

__all__ = ["get_resources_dir"]

_resources_dir: Path | None = None


def get_resources_dir() -> Path:
    """Get the path to the resources directory.

    Checks multiple locations to support different installation methods:
    1. Package data: gamelog/resources/ next to this package
    2. Next to the package (legacy checkout layout)
    3. sys.prefix/resources for bundled installs

    Returns:
        Path to the resources directory.

    Raises:
        FileNotFoundError: If resources directory cannot be found.
    """
    global _resources_dir
    if _resources_dir is not None:
        return _resources_dir

    # paths.py is at gamelog/utils/paths.py -> parent.parent = gamelog/
    candidate = Path(__file__).resolve().parent.parent / "resources"
    if candidate.is_dir():
        _resources_dir = candidate
        return _resources_dir

    candidate = Path(__file__).resolve().parent.parent.parent / "resources"
    if candidate.is_dir():
        _resources_dir = candidate
        return _resources_dir

    candidate = Path(sys.prefix) / "resources"
    if candidate.is_dir():
        _resources_dir = candidate
        return _resources_dir

    raise FileNotFoundError(
        "Could not locate resources directory. "
        "Searched: gamelog/resources/, project_root/resources/, sys.prefix/resources/"
    )
