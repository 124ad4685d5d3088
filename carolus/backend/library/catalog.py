"""Build the in-memory movie and TV catalog from the configured roots."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

from carolus.backend.common.errors import LibraryRootError, ParseError
from carolus.backend.common.logging import get_logger
from carolus.backend.library.filename_parser import parse_movie, parse_title
from carolus.backend.library.models import Catalog, Movie, TvShow, sort_key
from carolus.backend.library.scanner import list_media_files, list_show_directories
from carolus.backend.library.shows import assemble_series

if TYPE_CHECKING:
    from carolus.config.settings import Settings

log = get_logger(__name__)

PathLike = Union[str, Path]
_Key = Tuple[str, Optional[int]]


class CatalogBuilder:
    """Indexes a movie root and a TV root; either may be left unset."""

    def __init__(self, movie_root: Optional[PathLike] = None, tv_root: Optional[PathLike] = None) -> None:
        self._movie_root = Path(movie_root) if movie_root else None
        self._tv_root = Path(tv_root) if tv_root else None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def build(self) -> Catalog:
        movies = self.index_movies()
        shows = self.index_shows()
        catalog = Catalog(movies=tuple(movies), shows=tuple(shows))
        log.info("catalog_built", extra=dict(catalog.summary()))
        return catalog

    def index_movies(self) -> List[Movie]:
        if self._movie_root is None:
            return []

        found: Dict[_Key, Movie] = {}
        for path in list_media_files(self._movie_root):
            try:
                movie = parse_movie(self._movie_root, path)
            except ParseError as exc:
                log.warning("movie_parse_failed", extra={"path": str(path), "error": str(exc)})
                continue

            log.debug("movie_found", extra={"title": movie.title, "year": movie.year, "path": movie.file_path})
            if movie.key in found:
                log.debug("movie_replaced", extra={"title": movie.title, "previous": found[movie.key].file_path})
            found[movie.key] = movie

        return [found[key] for key in sorted(found, key=sort_key)]

    def index_shows(self) -> List[TvShow]:
        if self._tv_root is None:
            return []

        found: Dict[_Key, TvShow] = {}
        for show_dir in list_show_directories(self._tv_root):
            show = self._index_show(show_dir)
            if show is not None:
                found[show.key] = show

        return [found[key] for key in sorted(found, key=sort_key)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _index_show(self, show_dir: Path) -> Optional[TvShow]:
        try:
            title, year = parse_title(self._tv_root, show_dir)
        except ParseError as exc:
            log.warning("show_parse_failed", extra={"path": str(show_dir), "error": str(exc)})
            return None

        try:
            series = assemble_series(title, show_dir)
        except LibraryRootError as exc:
            log.warning("show_index_failed", extra={"path": str(show_dir), "error": str(exc)})
            return None

        series.sort(key=lambda s: s.series_number)
        return TvShow(title=title, year=year, series=tuple(series))


def build_catalog(movie_root: Optional[PathLike] = None, tv_root: Optional[PathLike] = None) -> Catalog:
    """Index both roots; raises :class:`LibraryRootError` if a root is unreadable."""

    return CatalogBuilder(movie_root, tv_root).build()


def demo_catalog() -> Catalog:
    """Fixed catalog used when running without a media library."""

    return Catalog(movies=(Movie(title="Die Hard", year=None, file_path="./fail"),), shows=())


def load_catalog(settings: "Settings") -> Catalog:
    if settings.demo:
        log.info("catalog_demo")
        return demo_catalog()
    return build_catalog(settings.library_paths.movies, settings.library_paths.shows)


__all__ = ["CatalogBuilder", "build_catalog", "demo_catalog", "load_catalog"]
