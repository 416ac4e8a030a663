"""Core interfaces for dependency injection."""

from .movie_data_source import IMovieDataSource
from .watch_history_store import IWatchHistoryStore

__all__ = [
    "IMovieDataSource",
    "IWatchHistoryStore",
]
