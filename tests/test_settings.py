from __future__ import annotations

import json
from pathlib import Path

import pytest

from carolus.backend.common.errors import ConfigError
from carolus.backend.common.tasks import default_worker_count
from carolus.config.settings import get_settings


def test_defaults():
    settings = get_settings()

    assert settings.app_name == "Carolus"
    assert settings.log_level == "INFO"
    assert settings.task_workers == default_worker_count()
    assert settings.library_paths.as_dict() == {"movie": None, "show": None}
    assert settings.demo is False


def test_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CAROLUS_MOVIES_PATH", str(tmp_path / "movies"))
    monkeypatch.setenv("CAROLUS_TV_PATH", str(tmp_path / "tv"))
    monkeypatch.setenv("CAROLUS_LOG_LEVEL", "debug")
    monkeypatch.setenv("CAROLUS_TASK_WORKERS", "3")
    monkeypatch.setenv("CAROLUS_DEMO", "yes")

    settings = get_settings(reload=True)

    assert settings.library_paths.movies == str((tmp_path / "movies").resolve())
    assert settings.library_paths.shows == str((tmp_path / "tv").resolve())
    assert settings.log_level == "DEBUG"
    assert settings.task_workers == 3
    assert settings.demo is True


def test_settings_file_is_overridden_by_environment(monkeypatch, tmp_path):
    settings_file = tmp_path / "carolus.json"
    settings_file.write_text(
        json.dumps({"app_name": "Home Cinema", "log_level": "warning", "library_paths": {"movies": "/srv/movies"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("CAROLUS_SETTINGS_FILE", str(settings_file))
    monkeypatch.setenv("CAROLUS_LOG_LEVEL", "ERROR")

    settings = get_settings(reload=True)

    assert settings.app_name == "Home Cinema"
    assert settings.log_level == "ERROR"
    assert settings.library_paths.movies == str(Path("/srv/movies").resolve())


def test_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("CAROLUS_APP_NAME=From Dotenv\n", encoding="utf-8")
    # register the variable with monkeypatch so load_dotenv's write is undone
    monkeypatch.setenv("CAROLUS_APP_NAME", "placeholder")
    monkeypatch.delenv("CAROLUS_APP_NAME")

    assert get_settings(reload=True).app_name == "From Dotenv"


def test_invalid_values(monkeypatch):
    monkeypatch.setenv("CAROLUS_TASK_WORKERS", "many")
    assert get_settings(reload=True).task_workers == default_worker_count()

    monkeypatch.setenv("CAROLUS_LOG_LEVEL", "LOUD")
    with pytest.raises(ConfigError):
        get_settings(reload=True)


def test_broken_settings_file(monkeypatch, tmp_path):
    settings_file = tmp_path / "broken.json"
    settings_file.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("CAROLUS_SETTINGS_FILE", str(settings_file))

    with pytest.raises(ConfigError):
        get_settings(reload=True)


def test_with_overrides(tmp_path):
    base = get_settings()

    updated = base.with_overrides(movies_path=str(tmp_path), log_level="debug", demo=True)

    assert updated.library_paths.movies == str(tmp_path.resolve())
    assert updated.library_paths.shows is None
    assert updated.log_level == "DEBUG"
    assert updated.demo is True
    assert base.demo is False
    assert base.library_paths.movies is None
