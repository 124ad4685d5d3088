"""Utilities to interpret media filenames into structured metadata.

Names are free-form user data, so every function here is heuristic and total:
it either returns the parsed value or raises a :class:`ParseError` subclass
that the catalog builder can log and skip.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple, Union

from carolus.backend.common.errors import (
    EmptyTitleError,
    InvalidYearError,
    NoSeasonEpisodeError,
)
from carolus.backend.library.models import U16_MAX, Movie

PathLike = Union[str, Path]

_TITLE_SANITIZE_RE = re.compile(r"[._]+")
_WHITESPACE_RE = re.compile(r"\s+")
_YEAR_SUFFIX_RE = re.compile(r"(?:\((?P<paren>\d{4})\)|\[(?P<bracket>\d{4})\])[\s._-]*$")
_EPISODE_TAG_RE = re.compile(r"(?<![a-z0-9])s(?P<season>\d{2,})e(?P<episode>\d{2,})(?!\d)", re.IGNORECASE)
_SEASON_RE = re.compile(r"(?<![a-z])season[\s._-]*(?P<number>\d+)", re.IGNORECASE)
_EPISODE_RE = re.compile(r"(?<![a-z])episode[\s._-]*(?P<number>\d+)", re.IGNORECASE)


def parse_movie(root: PathLike, file_path: PathLike) -> Movie:
    """Build a :class:`Movie` from a file such as ``Die.Hard.(1988).mp4``."""

    path = Path(file_path)
    title, year = _split_title_and_year(path.stem)
    return Movie(title=title, year=year, file_path=str(path))


def parse_title(root: PathLike, dir_path: PathLike) -> Tuple[str, Optional[int]]:
    """Title and optional year of a show from its top-level directory name."""

    return _split_title_and_year(Path(dir_path).name)


def parse_season_and_episode(file_path: PathLike) -> Tuple[int, int]:
    """Find the season/episode numbers of an episode file.

    ``S01E02`` style markers win; the file name is searched before its parent
    directory. Failing that, ``Season <n>`` and ``Episode <n>`` are looked up
    independently so ``Season 2/Episode 5.mp4`` also resolves.
    """

    path = Path(file_path)
    names = (path.stem, path.parent.name)

    for name in names:
        match = _EPISODE_TAG_RE.search(name)
        if match:
            return (
                _to_u16(match.group("season"), path),
                _to_u16(match.group("episode"), path),
            )

    season = _search_number(_SEASON_RE, names)
    episode = _search_number(_EPISODE_RE, names)
    if season is None or episode is None:
        raise NoSeasonEpisodeError(path.name)

    return _to_u16(season, path), _to_u16(episode, path)


def normalize_title(value: str) -> str:
    value = _TITLE_SANITIZE_RE.sub(" ", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def _split_title_and_year(name: str) -> Tuple[str, Optional[int]]:
    raw = name
    year: Optional[int] = None
    match = _YEAR_SUFFIX_RE.search(name)
    if match:
        year = _parse_year(match.group("paren") or match.group("bracket"), raw)
        raw = raw[: match.start()]

    title = normalize_title(raw)
    if not title:
        raise EmptyTitleError(name)

    return title, year


def _parse_year(token: str, name: str) -> int:
    try:
        year = int(token)
    except ValueError as exc:
        raise InvalidYearError(name, token) from exc
    if not 0 < year <= U16_MAX:
        raise InvalidYearError(name, token)
    return year


def _search_number(pattern: re.Pattern[str], names: Tuple[str, ...]) -> Optional[str]:
    for name in names:
        match = pattern.search(name)
        if match:
            return match.group("number")
    return None


def _to_u16(token: str, path: Path) -> int:
    value = int(token)
    if value > U16_MAX:
        raise NoSeasonEpisodeError(path.name, f"{token} is out of range")
    return value


__all__ = [
    "normalize_title",
    "parse_movie",
    "parse_season_and_episode",
    "parse_title",
]
