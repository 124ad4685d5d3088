from __future__ import annotations

from typing import Literal, TypedDict


class HealthReport(TypedDict):
    status: Literal["ok", "degraded", "fail"]
    components: dict[str, Literal["ok", "degraded", "fail"]]


class CatalogSummary(TypedDict):
    movies: int
    shows: int
    series: int
    episodes: int
