"""Custom exceptions for the application."""

from typing import Optional


class MovieDetailsError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(MovieDetailsError):
    """Configuration-related errors."""

    pass


class DataSourceError(MovieDetailsError):
    """Remote data source errors."""

    pass


class SourceFetchError(MovieDetailsError):
    """One of the detail page sources failed to load."""

    def __init__(self, source: str, cause: Optional[BaseException] = None) -> None:
        self.source = source
        self.cause = cause
        message = f"Failed to load {source}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SubmissionError(MovieDetailsError):
    """Rating submission errors."""

    pass


class WatchHistoryError(MovieDetailsError):
    """Watch history store errors."""

    pass
