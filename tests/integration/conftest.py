"""Integration test fixtures and configuration."""

import pytest

from movie_details.core.interfaces import IMovieDataSource, IWatchHistoryStore
from movie_details.core.services import JsonlWatchHistoryStore


@pytest.fixture
def integration_container(container, config, data_source):
    """Container wired to the fake data source and a real history file."""
    container.register_instance(IMovieDataSource, data_source)
    container.register_singleton(IWatchHistoryStore, JsonlWatchHistoryStore)
    return container
