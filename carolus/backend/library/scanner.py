"""Filesystem discovery for library roots.

Listings are sorted by path so that repeated builds over the same tree
discover entries in the same order on every platform.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, List, Union

from carolus.backend.common.errors import LibraryRootError
from carolus.backend.common.logging import get_logger

log = get_logger(__name__)

# Matched case-sensitively against the suffix without its dot.
MEDIA_EXTENSIONS = frozenset({"ogg", "mp4", "m4v", "webm"})

PathLike = Union[str, Path]


def is_media_file(path: Path) -> bool:
    return path.is_file() and path.suffix[1:] in MEDIA_EXTENSIONS


def list_media_files(root: PathLike) -> List[Path]:
    """Media files directly inside ``root`` (no recursion)."""

    return _collect(Path(root), Path.iterdir, is_media_file)


def list_show_directories(root: PathLike) -> List[Path]:
    """Immediate subdirectories of a TV root, one per show."""

    return _collect(Path(root), Path.iterdir, Path.is_dir)


def glob_media_files(show_root: PathLike) -> List[Path]:
    """Media files at any depth below a show directory."""

    return _collect(Path(show_root), _walk_files, is_media_file)


def _walk_files(root: Path) -> Iterable[Path]:
    def _raise(exc: OSError) -> None:
        raise exc

    # unreadable subdirectories raise instead of being skipped
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for name in filenames:
            yield Path(dirpath) / name


def _collect(
    root: Path,
    walk: Callable[[Path], Iterable[Path]],
    keep: Callable[[Path], bool],
) -> List[Path]:
    if not root.is_dir():
        reason = "does not exist" if not root.exists() else "is not a directory"
        raise LibraryRootError(root, reason)
    try:
        entries = sorted(entry for entry in walk(root) if keep(entry))
    except OSError as exc:
        raise LibraryRootError(root, exc.strerror or str(exc)) from exc

    log.debug("library_listing", extra={"root": str(root), "count": len(entries)})
    return entries


__all__ = [
    "MEDIA_EXTENSIONS",
    "glob_media_files",
    "is_media_file",
    "list_media_files",
    "list_show_directories",
]
