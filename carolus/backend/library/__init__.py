"""Local library indexing and lookup."""

from carolus.backend.library.catalog import (
    CatalogBuilder,
    build_catalog,
    demo_catalog,
    load_catalog,
)
from carolus.backend.library.models import Catalog, Movie, Page, TvEpisode, TvSeries, TvShow
from carolus.backend.library.resolver import CatalogResolver, PlaybackRequest, PlaybackResult

__all__ = [
    "Catalog",
    "CatalogBuilder",
    "CatalogResolver",
    "Movie",
    "Page",
    "PlaybackRequest",
    "PlaybackResult",
    "TvEpisode",
    "TvSeries",
    "TvShow",
    "build_catalog",
    "demo_catalog",
    "load_catalog",
]
