from __future__ import annotations

from typing import Optional


class CarolusError(Exception):
    """Base for all Carolus exceptions."""


class ConfigError(CarolusError):
    """Configuration related issues."""


class TaskError(CarolusError):
    """Task scheduling/execution issues."""


class LibraryRootError(CarolusError):
    """A configured library root could not be enumerated."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read library directory '{self.path}': {reason}")


class ParseError(CarolusError):
    """A file or directory name could not be turned into catalog metadata."""

    kind = "ParseError"

    def __init__(self, name: str, detail: Optional[str] = None) -> None:
        self.name = name
        message = f"{self.kind}: '{name}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EmptyTitleError(ParseError):
    kind = "Empty"


class InvalidYearError(ParseError):
    kind = "InvalidYear"


class NoSeasonEpisodeError(ParseError):
    kind = "NoSeasonEpisode"


class NotFound(CarolusError):
    """A lookup against the catalog matched nothing."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"'{self.title}' was not found."


class MovieNotFound(NotFound):
    pass


class ShowNotFound(NotFound):
    pass


class SeriesNotFound(NotFound):
    def __init__(self, title: str, series_number: int) -> None:
        self.series_number = series_number
        super().__init__(title)

    def _describe(self) -> str:
        return f"'{self.title}' series {self.series_number} was not found."


class EpisodeNotFound(NotFound):
    def __init__(self, title: str, series_number: int, episode_number: int) -> None:
        self.series_number = series_number
        self.episode_number = episode_number
        super().__init__(title)

    def _describe(self) -> str:
        return (
            f"'{self.title}' series {self.series_number} "
            f"episode {self.episode_number} was not found."
        )
