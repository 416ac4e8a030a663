"""Pytest configuration and fixtures."""

import asyncio
from datetime import date, datetime
from typing import Dict, List, Optional

import pytest

from movie_details.config import ConfigManager
from movie_details.core.interfaces import IMovieDataSource, IWatchHistoryStore
from movie_details.core.models import (
    ActorRecord,
    DetailsRecord,
    MediaRecord,
    RatedMovie,
    RatingRecord,
    ReviewRecord,
    SubmissionResult,
    WatchHistoryEntry,
)
from movie_details.core.services import MovieDetailsPage
from movie_details.infrastructure import Container
from movie_details.utils import DataSourceError, WatchHistoryError

MOVIE_ID = 42


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line("markers", "integration: tests crossing module boundaries")


class FakeDataSource(IMovieDataSource):
    """In-memory data source.

    With ``gated=True`` every fetch waits until ``release(source)`` is
    called, which lets tests choose the order in which sources resolve.
    """

    SOURCES = ("details", "cast", "similar", "reviews", "rating_status")

    def __init__(self, gated: bool = False, review_count: int = 2) -> None:
        self.gated = gated
        self.failures: Dict[str, Exception] = {}
        self._gates: Dict[str, asyncio.Event] = {}

        self.details = DetailsRecord(
            movie_id=MOVIE_ID,
            image="https://image.tmdb.org/t/p/w500/poster.jpg",
            title="The Answer",
            release_date=date(2005, 4, 28),
            genres=["Science Fiction", "Comedy"],
            duration=109,
            overview="Mostly harmless.",
            vote_average=6.8,
        )
        self.cast = [
            ActorRecord(actor_id=1, name="Martin Freeman"),
            ActorRecord(actor_id=2, name="Zooey Deschanel"),
        ]
        self.similar = [MediaRecord(media_id=7, title="Paul"), MediaRecord(media_id=8, title="Moon")]
        self.reviews = [
            ReviewRecord(author=f"user{i}", content=f"Review {i}") for i in range(review_count)
        ]
        self.rated: List[RatedMovie] = []
        self.session_ids = iter(f"session-{i}" for i in range(1, 1000))

        self.submit_results: List[SubmissionResult] = []
        self.submit_failures: List[Exception] = []
        self.submit_calls: List[tuple] = []
        self.rating_status_calls = 0

    def fail(self, source: str, error: Optional[Exception] = None) -> None:
        self.failures[source] = error or DataSourceError(f"{source} unavailable")

    async def release(self, *sources: str) -> None:
        """Let gated fetches resolve, one source at a time, in order."""
        for source in sources:
            self._gate(source).set()
            for _ in range(10):
                await asyncio.sleep(0)

    def _gate(self, source: str) -> asyncio.Event:
        if source not in self._gates:
            self._gates[source] = asyncio.Event()
        return self._gates[source]

    async def _resolve(self, source: str, value):
        if self.gated:
            await self._gate(source).wait()
        else:
            await asyncio.sleep(0)
        if source in self.failures:
            raise self.failures[source]
        return value

    async def fetch_details(self, movie_id):
        return await self._resolve("details", self.details)

    async def fetch_cast(self, movie_id):
        return await self._resolve("cast", list(self.cast))

    async def fetch_similar(self, movie_id):
        return await self._resolve("similar", list(self.similar))

    async def fetch_reviews(self, movie_id):
        return await self._resolve("reviews", list(self.reviews))

    async def fetch_rating_status(self):
        self.rating_status_calls += 1
        record = RatingRecord(session_id=next(self.session_ids), rated=list(self.rated))
        return await self._resolve("rating_status", record)

    async def submit_rating(self, movie_id, value, session_id):
        self.submit_calls.append((movie_id, value, session_id))
        await asyncio.sleep(0)
        if self.submit_failures:
            raise self.submit_failures.pop(0)
        if self.submit_results:
            return self.submit_results.pop(0)
        return SubmissionResult(status_code=1, status_message="Success.")


class RecordingWatchHistory(IWatchHistoryStore):
    """Watch history store keeping entries in memory."""

    def __init__(self) -> None:
        self.entries: List[WatchHistoryEntry] = []
        self.error: Optional[Exception] = None

    async def record_view(
        self, movie_id, poster_path, title, duration, vote_average, release_date, media_type
    ):
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        self.entries.append(
            WatchHistoryEntry(
                movie_id=movie_id,
                poster_path=poster_path,
                title=title,
                duration=duration,
                vote_average=vote_average,
                release_date=release_date,
                media_type=media_type,
                viewed_at=datetime(2024, 1, 1, 12, 0),
            )
        )

    async def list_views(self, limit=None):
        entries = list(reversed(self.entries))
        return entries[:limit] if limit is not None else entries


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = f"""
tmdb:
  api_key: "test-tmdb-key"
  retry_attempts: 2

rating:
  success_status_codes: [1, 12]

watch_history:
  path: "{tmp_path / 'history' / 'watch_history.jsonl'}"

logging:
  level: "DEBUG"
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager):
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    return Container(config_manager)


@pytest.fixture
def data_source():
    """Fake data source resolving immediately."""
    return FakeDataSource()


@pytest.fixture
def gated_data_source():
    """Fake data source resolving only when released."""
    return FakeDataSource(gated=True)


@pytest.fixture
def watch_history():
    """In-memory watch history."""
    return RecordingWatchHistory()


@pytest.fixture
def watch_history_error():
    """Error used to make the watch history fail."""
    return WatchHistoryError("disk full")


@pytest.fixture
def page(config, data_source, watch_history):
    """Detail page over the fake data source."""
    return MovieDetailsPage(MOVIE_ID, config, data_source, watch_history)


@pytest.fixture
def gated_page(config, gated_data_source, watch_history):
    """Detail page whose sources resolve on demand."""
    return MovieDetailsPage(MOVIE_ID, config, gated_data_source, watch_history)
