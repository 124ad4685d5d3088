from __future__ import annotations

import sys

from carolus.backend.common.errors import LibraryRootError
from carolus.backend.common.logging import get_logger, init_logging
from carolus.backend.common.types import HealthReport
from carolus.backend.library import CatalogResolver, load_catalog
from carolus.config.settings import Settings, get_settings


def quick_self_check(settings: Settings) -> HealthReport:
    components = {
        "python": "ok" if sys.version_info >= (3, 10) else "degraded",
        "logging": "ok",
        "config": "ok",
        "movies_root": "ok" if settings.library_paths.movies or settings.demo else "degraded",
        "tv_root": "ok" if settings.library_paths.shows or settings.demo else "degraded",
    }

    status = "ok" if all(v == "ok" for v in components.values()) else "degraded"

    return {"status": status, "components": components}


def main() -> int:
    settings = get_settings()

    init_logging(settings.log_level)
    log = get_logger("carolus.startup")

    log.info("boot_begin", extra={"app": settings.app_name, "env": settings.env, "log_level": settings.log_level})

    health = quick_self_check(settings)
    log.info("health_report", extra=dict(health))

    # the catalog is built exactly once; request handlers only read it
    try:
        catalog = load_catalog(settings)
    except LibraryRootError as exc:
        log.error("boot_failed", extra={"path": exc.path, "error": exc.reason})
        return 1

    resolver = CatalogResolver(catalog)
    log.info("boot_ready", extra={"version": __import__("carolus").__version__, **resolver.catalog.summary()})

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
