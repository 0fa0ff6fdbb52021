"""
Central version management for Game Log.
"""

from __future__ import annotations

__all__ = ["__app_name__", "__version__", "__release_date__", "__author__", "__license__"]

__app_name__ = "Game Log"
__version__ = "0.4.0"
__release_date__ = "2026-10-17"
__author__ = "Game Log contributors"
__license__ = "MIT"
