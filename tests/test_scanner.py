from __future__ import annotations

import os

import pytest

from carolus.backend.common.errors import LibraryRootError, NotFound
from carolus.backend.library.scanner import (
    glob_media_files,
    list_media_files,
    list_show_directories,
)


def test_list_media_files_filters_extensions(tmp_path, make_files):
    make_files(tmp_path, ["b.ogg", "a.mp4", "c.MP4", "d.mkv", "e.webm.txt", "nested/f.m4v"])
    (tmp_path / "looks-like.webm").mkdir()

    assert list_media_files(tmp_path) == [tmp_path / "a.mp4", tmp_path / "b.ogg"]


def test_list_show_directories_only_returns_directories(tmp_path, make_files):
    make_files(tmp_path, ["Zulu/S01E01.mp4", "Alpha/S01E01.mp4", "loose.mp4"])

    assert list_show_directories(tmp_path) == [tmp_path / "Alpha", tmp_path / "Zulu"]


def test_glob_media_files_recurses(tmp_path, make_files):
    make_files(tmp_path, ["Season 1/S01E01.mp4", "Season 1/extras/S01E99.webm", "S02E01.m4v", "cover.jpg"])

    assert glob_media_files(tmp_path) == [
        tmp_path / "S02E01.m4v",
        tmp_path / "Season 1" / "S01E01.mp4",
        tmp_path / "Season 1" / "extras" / "S01E99.webm",
    ]


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(LibraryRootError) as excinfo:
        list_media_files(tmp_path / "missing")

    assert excinfo.value.path == str(tmp_path / "missing")
    assert not isinstance(excinfo.value, NotFound)


def test_file_root_is_fatal(tmp_path, make_files):
    (file,) = make_files(tmp_path, ["movie.mp4"])

    with pytest.raises(LibraryRootError):
        list_show_directories(file)


def test_unreadable_subdirectory_fails_glob(tmp_path, make_files, monkeypatch):
    make_files(tmp_path, ["S01E01.mp4", "Season 2/S02E01.mp4"])
    real_scandir = os.scandir

    def scandir(path="."):
        if os.fspath(path).endswith("Season 2"):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    with pytest.raises(LibraryRootError) as excinfo:
        glob_media_files(tmp_path)

    assert excinfo.value.reason == "Permission denied"
