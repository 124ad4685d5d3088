from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import pytest

from carolus.backend.library.models import Catalog, Movie, TvEpisode, TvSeries, TvShow
from carolus.config.settings import core


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep CAROLUS_* variables, ``.env`` files and cached settings out of tests."""

    for name in list(os.environ):
        if name.startswith("CAROLUS_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(core, "_SETTINGS_SINGLETON", None)


@pytest.fixture
def make_files():
    """Create empty files (and their parent directories) below a root."""

    def _make(root: Path, names: Iterable[str]) -> list[Path]:
        created = []
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
            created.append(path)
        return created

    return _make


@pytest.fixture
def sample_catalog() -> Catalog:
    return Catalog(
        movies=(
            Movie(title="Alien", year=1979, file_path="/m/Alien (1979).mp4"),
            Movie(title="Die Hard", year=None, file_path="/m/Die Hard.mp4"),
            Movie(title="Heat", year=1986, file_path="/m/Heat (1986).mp4"),
            Movie(title="Heat", year=1995, file_path="/m/Heat (1995).mp4"),
        ),
        shows=(
            TvShow(
                title="Doctor Who",
                year=2005,
                series=(
                    TvSeries(
                        series_number=1,
                        episodes=(
                            TvEpisode(episode_number=1, file_path="/tv/Doctor Who (2005)/S01E01.mp4"),
                            TvEpisode(episode_number=2, file_path="/tv/Doctor Who (2005)/S01E02.mp4"),
                        ),
                    ),
                ),
            ),
            TvShow(
                title="Sherlock",
                year=None,
                series=(
                    TvSeries(
                        series_number=1,
                        episodes=(TvEpisode(episode_number=1, file_path="/tv/Sherlock/Sherlock.S01E01.mp4"),),
                    ),
                ),
            ),
        ),
    )
