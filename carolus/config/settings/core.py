from __future__ import annotations

import dataclasses
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from dataclasses import dataclass, field

from dotenv import load_dotenv

from carolus.backend.common.errors import ConfigError
from carolus.backend.common.logging import level_from_name
from carolus.backend.common.tasks import default_worker_count

from .library import LibraryPaths, coerce_path, load_user_settings

_SETTINGS_LOCK = threading.Lock()
_SETTINGS_SINGLETON: Optional["Settings"] = None

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    env: str
    log_level: str
    task_workers: int
    library_paths: LibraryPaths = field(default_factory=LibraryPaths)
    demo: bool = False
    settings_file: Optional[str] = None

    def with_overrides(
        self,
        *,
        movies_path: Optional[str] = None,
        tv_path: Optional[str] = None,
        log_level: Optional[str] = None,
        demo: Optional[bool] = None,
    ) -> "Settings":
        """Copy of these settings with command-line values applied on top."""

        paths = LibraryPaths(
            movies=coerce_path(movies_path) if movies_path else self.library_paths.movies,
            shows=coerce_path(tv_path) if tv_path else self.library_paths.shows,
        )
        return dataclasses.replace(
            self,
            library_paths=paths,
            log_level=_validate_log_level(log_level) if log_level else self.log_level,
            demo=self.demo if demo is None else demo,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "app_name": self.app_name,
            "env": self.env,
            "log_level": self.log_level,
            "task_workers": self.task_workers,
            "library_paths": self.library_paths.as_dict(),
            "demo": self.demo,
            "settings_file": self.settings_file,
        }


def _validate_log_level(value: str) -> str:
    level = str(value).strip().upper()
    if level_from_name(level) is None:
        raise ConfigError(f"Unknown log level '{value}'")
    return level


def _coerce_workers(value: Any) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return default_worker_count()


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _build_settings() -> Settings:
    load_dotenv(Path.cwd() / ".env")

    settings_file = os.getenv("CAROLUS_SETTINGS_FILE")
    user_cfg = load_user_settings(settings_file)
    libs_cfg = user_cfg.get("library_paths") or {}

    app_name = os.getenv("CAROLUS_APP_NAME", user_cfg.get("app_name", "Carolus"))
    env = os.getenv("CAROLUS_ENV", user_cfg.get("env", "development"))
    log_level = _validate_log_level(os.getenv("CAROLUS_LOG_LEVEL", user_cfg.get("log_level", "INFO")))
    task_workers = _coerce_workers(os.getenv("CAROLUS_TASK_WORKERS") or user_cfg.get("task_workers"))
    demo = _coerce_bool(os.getenv("CAROLUS_DEMO", user_cfg.get("demo", False)))

    library_paths = LibraryPaths(
        movies=coerce_path(os.getenv("CAROLUS_MOVIES_PATH") or libs_cfg.get("movie") or libs_cfg.get("movies")),
        shows=coerce_path(
            os.getenv("CAROLUS_TV_PATH")
            or libs_cfg.get("show")
            or libs_cfg.get("shows")
            or libs_cfg.get("tv")
        ),
    )

    return Settings(
        app_name=app_name,
        env=env,
        log_level=log_level,
        task_workers=task_workers,
        library_paths=library_paths,
        demo=demo,
        settings_file=settings_file,
    )


def get_settings(*, reload: bool = False) -> Settings:
    global _SETTINGS_SINGLETON
    with _SETTINGS_LOCK:
        if _SETTINGS_SINGLETON is None or reload:
            _SETTINGS_SINGLETON = _build_settings()

        return _SETTINGS_SINGLETON


__all__ = ["Settings", "get_settings"]
