"""Read-only lookups over a built :class:`Catalog`."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carolus.backend.common.errors import (
    EpisodeNotFound,
    MovieNotFound,
    NotFound,
    SeriesNotFound,
    ShowNotFound,
)
from carolus.backend.common.logging import get_logger
from carolus.backend.common.tasks import TaskRunner, TaskSpec
from carolus.backend.library.models import (
    U16_MAX,
    Catalog,
    Movie,
    Page,
    TvEpisode,
    TvSeries,
    TvShow,
)

log = get_logger(__name__)

T = TypeVar("T", Movie, TvShow)


class PlaybackRequest(BaseModel):
    """A movie (no ``series``) or an episode to resolve to a file."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    year: Optional[int] = Field(default=None, ge=0, le=U16_MAX)
    series: Optional[int] = Field(default=None, ge=0, le=U16_MAX)
    episode: Optional[int] = Field(default=None, ge=0, le=U16_MAX)

    @model_validator(mode="after")
    def _episode_needs_series(self) -> "PlaybackRequest":
        if (self.series is None) != (self.episode is None):
            raise ValueError("series and episode must be given together")
        return self


class PlaybackResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    request: PlaybackRequest
    file_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.file_path is not None


class CatalogResolver:
    """Answers lookups against one immutable catalog.

    Titles match case-insensitively. When a year is given an exact
    ``(title, year)`` match is preferred, otherwise the first entry with a
    matching title is used regardless of its year.
    """

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def movies(self) -> Tuple[Movie, ...]:
        return self._catalog.movies

    def shows(self) -> Tuple[TvShow, ...]:
        return self._catalog.shows

    def find_movie(self, title: str, year: Optional[int] = None) -> Movie:
        movie = _match_title(self._catalog.movies, title, year)
        if movie is None:
            raise MovieNotFound(title)
        return movie

    def find_show(self, title: str, year: Optional[int] = None) -> TvShow:
        show = _match_title(self._catalog.shows, title, year)
        if show is None:
            raise ShowNotFound(title)
        return show

    def find_series(self, title: str, series_number: int, year: Optional[int] = None) -> Tuple[TvShow, TvSeries]:
        show = self.find_show(title, year)
        for series in show.series:
            if series.series_number == series_number:
                return show, series
        raise SeriesNotFound(title, series_number)

    def find_episode(
        self,
        title: str,
        series_number: int,
        episode_number: int,
        year: Optional[int] = None,
    ) -> Tuple[TvShow, TvSeries, TvEpisode]:
        try:
            show, series = self.find_series(title, series_number, year)
        except SeriesNotFound as exc:
            raise EpisodeNotFound(title, series_number, episode_number) from exc

        for episode in series.episodes:
            if episode.episode_number == episode_number:
                return show, series, episode
        raise EpisodeNotFound(title, series_number, episode_number)

    def page_movies(self, page: int = 1, per_page: int = 20) -> Page[Movie]:
        return Page[Movie](**_paginate(self._catalog.movies, page, per_page))

    def page_shows(self, page: int = 1, per_page: int = 20) -> Page[TvShow]:
        return Page[TvShow](**_paginate(self._catalog.shows, page, per_page))

    def resolve_playback(self, request: PlaybackRequest) -> str:
        """File path to open for ``request``; raises :class:`NotFound`."""

        if request.series is None or request.episode is None:
            return self.find_movie(request.title, request.year).file_path
        _, _, episode = self.find_episode(request.title, request.series, request.episode, request.year)
        return episode.file_path

    def resolve_many(
        self,
        requests: Iterable[PlaybackRequest],
        *,
        max_workers: Optional[int] = None,
    ) -> List[PlaybackResult]:
        """Resolve requests on a worker pool; results keep the input order."""

        pending = list(requests)
        if not pending:
            return []

        with TaskRunner(max_workers=max_workers, context="resolve_many") as runner:
            futures = [
                runner.submit(TaskSpec(fn=self._resolve_one, args=(request,), name=f"resolve_{request.title}"))
                for request in pending
            ]
            return [future.result() for future in futures]

    def _resolve_one(self, request: PlaybackRequest) -> PlaybackResult:
        try:
            file_path = self.resolve_playback(request)
        except NotFound as exc:
            log.debug("playback_not_found", extra={"title": request.title, "error": str(exc)})
            return PlaybackResult(request=request, error=str(exc))
        return PlaybackResult(request=request, file_path=file_path)


def _match_title(entries: Sequence[T], title: str, year: Optional[int]) -> Optional[T]:
    wanted = title.casefold()
    candidates = [entry for entry in entries if entry.title.casefold() == wanted]
    if year is not None:
        for entry in candidates:
            if entry.year == year:
                return entry
    return candidates[0] if candidates else None


def _paginate(entries: Sequence[T], page: int, per_page: int) -> dict:
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be positive")
    start = (page - 1) * per_page
    return {
        "items": tuple(entries[start:start + per_page]),
        "page": page,
        "per_page": per_page,
        "total": len(entries),
        "pages": math.ceil(len(entries) / per_page),
    }


__all__ = ["CatalogResolver", "PlaybackRequest", "PlaybackResult"]
