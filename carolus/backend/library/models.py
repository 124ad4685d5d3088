"""Immutable catalog models shared by the indexer and the resolver.

Every model is frozen and stores its collections as tuples, so a built
:class:`Catalog` can be handed to any number of concurrent readers without
locking.
"""

from __future__ import annotations

from typing import Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from carolus.backend.common.types import CatalogSummary

# Years, series and episode numbers share the unsigned 16-bit range.
U16_MAX = 65535

T = TypeVar("T")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Movie(_Frozen):
    title: str
    year: Optional[int] = Field(default=None, ge=0, le=U16_MAX)
    file_path: str

    @property
    def key(self) -> Tuple[str, Optional[int]]:
        return (self.title, self.year)


class TvEpisode(_Frozen):
    episode_number: int = Field(ge=0, le=U16_MAX)
    file_path: str


class TvSeries(_Frozen):
    series_number: int = Field(ge=0, le=U16_MAX)
    episodes: Tuple[TvEpisode, ...] = ()


class TvShow(_Frozen):
    title: str
    year: Optional[int] = Field(default=None, ge=0, le=U16_MAX)
    series: Tuple[TvSeries, ...] = ()

    @property
    def key(self) -> Tuple[str, Optional[int]]:
        return (self.title, self.year)


class Catalog(_Frozen):
    """The movies and shows produced by one indexing pass."""

    movies: Tuple[Movie, ...] = ()
    shows: Tuple[TvShow, ...] = ()

    def summary(self) -> CatalogSummary:
        series = [s for show in self.shows for s in show.series]
        return {
            "movies": len(self.movies),
            "shows": len(self.shows),
            "series": len(series),
            "episodes": sum(len(s.episodes) for s in series),
        }


class Page(_Frozen, Generic[T]):
    """One slice of a catalog listing."""

    items: Tuple[T, ...] = ()
    page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    total: int = Field(ge=0)
    pages: int = Field(ge=0)


def sort_key(key: Tuple[str, Optional[int]]) -> Tuple[str, bool, int]:
    """Order ``(title, year)`` pairs with a missing year before any year."""

    title, year = key
    return (title, year is not None, year or 0)


__all__ = [
    "Catalog",
    "Movie",
    "Page",
    "TvEpisode",
    "TvSeries",
    "TvShow",
    "U16_MAX",
    "sort_key",
]
