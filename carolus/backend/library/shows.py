"""Group the episode files of one show directory into series."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

from carolus.backend.common.errors import ParseError
from carolus.backend.common.logging import get_logger
from carolus.backend.library.filename_parser import parse_season_and_episode
from carolus.backend.library.models import TvEpisode, TvSeries
from carolus.backend.library.scanner import glob_media_files

log = get_logger(__name__)


def assemble_series(show_title: str, show_root: Union[str, Path]) -> List[TvSeries]:
    """Bucket every episode file below ``show_root`` by season number.

    Episodes keep discovery order and duplicate numbers are all retained.
    The returned series are in no particular order.
    """

    buckets: Dict[int, List[TvEpisode]] = {}
    for file in glob_media_files(show_root):
        try:
            season, episode = parse_season_and_episode(file)
        except ParseError as exc:
            log.warning("episode_parse_failed", extra={"show": show_title, "path": str(file), "error": str(exc)})
            continue

        log.debug(
            "episode_found",
            extra={"show": show_title, "season": season, "episode": episode, "path": str(file)},
        )
        buckets.setdefault(season, []).append(TvEpisode(episode_number=episode, file_path=str(file)))

    return [
        TvSeries(series_number=number, episodes=tuple(episodes))
        for number, episodes in buckets.items()
    ]


__all__ = ["assemble_series"]
