from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from dataclasses import dataclass

from carolus.backend.common.errors import ConfigError


def coerce_path(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    path = Path(value).expanduser()
    try:
        return str(path.resolve())
    except OSError:
        return str(path)


def load_user_settings(path: Optional[str]) -> Dict[str, Any]:
    """Read the optional JSON settings file; a missing file yields ``{}``."""

    if not path:
        return {}
    user_path = Path(path).expanduser()
    if not user_path.exists():
        return {}
    try:
        with user_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read settings file '{user_path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file '{user_path}' must contain a JSON object")
    return data


@dataclass
class LibraryPaths:
    movies: Optional[str] = None
    shows: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "movie": self.movies,
            "show": self.shows,
        }


__all__ = [
    "LibraryPaths",
    "coerce_path",
    "load_user_settings",
]
