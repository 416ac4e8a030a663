"""Utility functions and classes."""

from .exceptions import (
    ConfigurationError,
    DataSourceError,
    MovieDetailsError,
    SourceFetchError,
    SubmissionError,
    WatchHistoryError,
)

__all__ = [
    "MovieDetailsError",
    "ConfigurationError",
    "DataSourceError",
    "SourceFetchError",
    "SubmissionError",
    "WatchHistoryError",
]
