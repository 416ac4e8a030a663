"""Tests for the dependency injection container."""

from pathlib import Path

import pytest

from movie_details.config import Config
from movie_details.core.interfaces import IMovieDataSource, IWatchHistoryStore
from movie_details.core.services import JsonlWatchHistoryStore, MovieDetailsPage, TMDbDataSource


@pytest.mark.unit
def test_default_services_are_singletons(container):
    """Registered implementations resolve once and are reused."""
    container.configure_default_services()

    store = container.get(IWatchHistoryStore)
    source = container.get(IMovieDataSource)

    assert isinstance(store, JsonlWatchHistoryStore)
    assert isinstance(source, TMDbDataSource)
    assert container.get(IWatchHistoryStore) is store


@pytest.mark.unit
def test_unregistered_service(container):
    """Resolving an unknown interface raises."""
    with pytest.raises(ValueError, match="Service not registered"):
        container.get(IMovieDataSource)


@pytest.mark.unit
def test_create_details_page(container, data_source, watch_history):
    """Each call builds a fresh page over the registered services."""
    container.register_instance(IMovieDataSource, data_source)
    container.register_instance(IWatchHistoryStore, watch_history)

    first = container.create_details_page(42)
    second = container.create_details_page(42)

    assert isinstance(first, MovieDetailsPage)
    assert first is not second
    assert first.store is not second.store
    assert first.movie_id == 42


@pytest.mark.unit
def test_reset(container, data_source):
    """Reset drops every registration."""
    container.register_instance(IMovieDataSource, data_source)
    container.reset()

    with pytest.raises(ValueError):
        container.get(IMovieDataSource)


class SourceBackedHistory(JsonlWatchHistoryStore):
    """History store that also needs the data source."""

    def __init__(self, config: Config, source: IMovieDataSource) -> None:
        super().__init__(config)
        self.source = source


@pytest.mark.unit
def test_dependencies_are_injected(container, config, data_source):
    """Constructor parameters resolve from config and registered services."""
    container.register_instance(IMovieDataSource, data_source)
    container.register_singleton(IWatchHistoryStore, SourceBackedHistory)

    store = container.get(IWatchHistoryStore)

    assert store.source is data_source
    assert store.path == Path(config.watch_history.path)
