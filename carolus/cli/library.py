"""Library CLI: index the configured roots and query the resulting catalog."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from carolus.backend.common.errors import ConfigError, LibraryRootError, NotFound
from carolus.backend.common.logging import get_logger, init_logging, level_from_verbosity
from carolus.backend.library import CatalogResolver, PlaybackRequest, load_catalog
from carolus.backend.library.models import TvSeries, TvShow
from carolus.config.settings import Settings, get_settings

from ._utils import (
    build_subparser,
    exit_with_error,
    print_json,
    require_subcommand,
    to_serializable,
)

log = get_logger("carolus.cli")

_NOT_FOUND_EXIT = 2


def _show_header(show: TvShow) -> Dict[str, Any]:
    return {"title": show.title, "year": show.year, "series": [s.series_number for s in show.series]}


def _series_payload(series: TvSeries) -> Dict[str, Any]:
    return {
        "series_number": series.series_number,
        "episodes": [e.episode_number for e in series.episodes],
    }


def _handle_index(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    print_json(
        {
            "library_paths": settings.library_paths.as_dict(),
            "demo": settings.demo,
            "summary": dict(resolver.catalog.summary()),
        }
    )


def _handle_movies(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    print_json(to_serializable(resolver.page_movies(args.page, args.per_page)))


def _handle_shows(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    print_json(to_serializable(resolver.page_shows(args.page, args.per_page)))


def _handle_movie(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    print_json(to_serializable(resolver.find_movie(args.title, args.year)))


def _handle_show(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    print_json(to_serializable(resolver.find_show(args.title, args.year)))


def _handle_series(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    show, series = resolver.find_series(args.title, args.series, args.year)
    print_json({"show": _show_header(show), "series": to_serializable(series)})


def _handle_episode(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    show, series, episode = resolver.find_episode(args.title, args.series, args.episode, args.year)
    print_json(
        {
            "show": _show_header(show),
            "series": _series_payload(series),
            "episode": to_serializable(episode),
        }
    )


def _handle_play_movie(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    request = PlaybackRequest(title=args.title, year=args.year)
    print(resolver.resolve_playback(request))


def _handle_play_tv(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    request = PlaybackRequest(title=args.title, year=args.year, series=args.series, episode=args.episode)
    print(resolver.resolve_playback(request))


def _load_requests(path: Path) -> List[PlaybackRequest]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        exit_with_error(f"Failed to read '{path}': {exc}")
    if not isinstance(raw, list):
        exit_with_error(f"'{path}' must contain a JSON list of requests")
    try:
        return [PlaybackRequest.model_validate(entry) for entry in raw]
    except ValidationError as exc:
        exit_with_error(f"Invalid playback request: {exc}")


def _handle_resolve(args: argparse.Namespace, resolver: CatalogResolver, settings: Settings) -> None:
    requests = _load_requests(Path(args.file))
    results = resolver.resolve_many(requests, max_workers=args.workers or settings.task_workers)
    print_json(to_serializable(results))


def _add_year(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--year", type=int, help="Preferred release year; titles without it still match.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carolus",
        description="Index a local movie/TV library and resolve titles to playable files.",
    )
    parser.add_argument("-v", dest="verbose", action="count", default=0, help="Sets the level of verbosity.")
    parser.add_argument("--movie-path", help="Movie directory (overrides CAROLUS_MOVIES_PATH).")
    parser.add_argument("--tv-path", help="TV directory (overrides CAROLUS_TV_PATH).")
    parser.add_argument("--demo", action="store_true", default=None, help="Use the built-in demo catalog.")
    subparsers = parser.add_subparsers(dest="command")
    require_subcommand(subparsers)

    index_parser = build_subparser(subparsers, "index", help="Index the library and print a summary.")
    index_parser.set_defaults(func=_handle_index)

    for name, handler, noun in (("movies", _handle_movies, "movies"), ("shows", _handle_shows, "TV shows")):
        listing = build_subparser(subparsers, name, help=f"List indexed {noun}.")
        listing.add_argument("--page", type=int, default=1, help="Page to display (1-based).")
        listing.add_argument("--per-page", type=int, default=20, help="Entries per page.")
        listing.set_defaults(func=handler)

    movie_parser = build_subparser(subparsers, "movie", help="Look up a movie by title.")
    movie_parser.add_argument("title", help="Movie title (case-insensitive).")
    _add_year(movie_parser)
    movie_parser.set_defaults(func=_handle_movie)

    show_parser = build_subparser(subparsers, "show", help="Look up a TV show by title.")
    show_parser.add_argument("title", help="Show title (case-insensitive).")
    _add_year(show_parser)
    show_parser.set_defaults(func=_handle_show)

    series_parser = build_subparser(subparsers, "series", help="Look up one series of a TV show.")
    series_parser.add_argument("title", help="Show title (case-insensitive).")
    series_parser.add_argument("series", type=int, help="Series (season) number.")
    _add_year(series_parser)
    series_parser.set_defaults(func=_handle_series)

    episode_parser = build_subparser(subparsers, "episode", help="Look up one episode of a TV show.")
    episode_parser.add_argument("title", help="Show title (case-insensitive).")
    episode_parser.add_argument("series", type=int, help="Series (season) number.")
    episode_parser.add_argument("episode", type=int, help="Episode number.")
    _add_year(episode_parser)
    episode_parser.set_defaults(func=_handle_episode)

    # Play ---------------------------------------------------------------
    play_parser = build_subparser(subparsers, "play", help="Print the file to open for a movie or episode.")
    play_sub = play_parser.add_subparsers(dest="play_command")
    require_subcommand(play_sub)

    play_movie = build_subparser(play_sub, "movie", help="Resolve a movie to its file.")
    play_movie.add_argument("title", help="Movie title.")
    _add_year(play_movie)
    play_movie.set_defaults(func=_handle_play_movie)

    play_tv = build_subparser(play_sub, "tv", help="Resolve a TV episode to its file.")
    play_tv.add_argument("title", help="Show title.")
    play_tv.add_argument("series", type=int, help="Series (season) number.")
    play_tv.add_argument("episode", type=int, help="Episode number.")
    _add_year(play_tv)
    play_tv.set_defaults(func=_handle_play_tv)

    resolve_parser = build_subparser(
        subparsers,
        "resolve",
        help="Resolve a JSON list of playback requests concurrently.",
    )
    resolve_parser.add_argument("file", help="JSON file holding [{\"title\": ..., \"year\": ..., \"series\": ..., \"episode\": ...}].")
    resolve_parser.add_argument("--workers", type=int, help="Worker threads (defaults to CAROLUS_TASK_WORKERS).")
    resolve_parser.set_defaults(func=_handle_resolve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        base = get_settings()
        # -v always wins; otherwise an explicit CAROLUS_LOG_LEVEL is kept
        explicit_level = "CAROLUS_LOG_LEVEL" in os.environ
        settings = base.with_overrides(
            movies_path=args.movie_path,
            tv_path=args.tv_path,
            log_level=None if explicit_level and not args.verbose else level_from_verbosity(args.verbose),
            demo=args.demo,
        )
    except ConfigError as exc:
        exit_with_error(str(exc))

    init_logging(settings.log_level, stream=sys.stderr)

    try:
        catalog = load_catalog(settings)
    except LibraryRootError as exc:
        log.error("catalog_build_failed", extra={"path": exc.path, "error": exc.reason})
        exit_with_error(str(exc))

    resolver = CatalogResolver(catalog)
    try:
        args.func(args, resolver, settings)
    except NotFound as exc:
        exit_with_error(str(exc), code=_NOT_FOUND_EXIT)
    except ValueError as exc:
        exit_with_error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
