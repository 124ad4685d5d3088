from __future__ import annotations

from .core import Settings, get_settings
from .library import LibraryPaths, coerce_path, load_user_settings

__all__ = [
    "LibraryPaths",
    "Settings",
    "coerce_path",
    "get_settings",
    "load_user_settings",
]
