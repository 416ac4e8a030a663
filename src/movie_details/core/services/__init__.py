"""Core service implementations."""

from .detail_aggregator import DetailAggregator, watch_history_hook
from .movie_details_page import MovieDetailsPage
from .rating_workflow import RatingWorkflow
from .tmdb_data_source import TMDbDataSource
from .watch_history_store import JsonlWatchHistoryStore

__all__ = [
    "DetailAggregator",
    "watch_history_hook",
    "MovieDetailsPage",
    "RatingWorkflow",
    "TMDbDataSource",
    "JsonlWatchHistoryStore",
]
