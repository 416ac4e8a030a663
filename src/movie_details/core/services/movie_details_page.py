"""Detail page of a single movie."""

from typing import Any, Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ..interfaces import IMovieDataSource, IWatchHistoryStore
from ..models import SubmissionResult, ViewState
from ..state import EventChannel, ViewStateStore
from .detail_aggregator import DetailAggregator, watch_history_hook
from .rating_workflow import RatingWorkflow


class MovieDetailsPage(LoggerMixin):
    """State holder for one detail page instance.

    Created per movie and discarded on teardown; nothing is shared
    between pages. Owns the view state store, the one-shot UI event
    channels, the aggregator and the rating workflow.
    """

    def __init__(
        self,
        movie_id: int,
        config: Config,
        data_source: IMovieDataSource,
        watch_history: IWatchHistoryStore,
    ) -> None:
        """Initialize page.

        Args:
            movie_id: Movie shown by the page.
            config: Application configuration.
            data_source: Remote data source.
            watch_history: Watch history store.
        """
        self.movie_id = movie_id
        self.store = ViewStateStore()

        self.back_event: EventChannel[bool] = EventChannel("back")
        self.movie_click_event: EventChannel[int] = EventChannel("movie_click")
        self.cast_click_event: EventChannel[int] = EventChannel("cast_click")
        self.trailer_click_event: EventChannel[bool] = EventChannel("trailer_click")
        self.reviews_click_event: EventChannel[bool] = EventChannel("reviews_click")
        self.save_click_event: EventChannel[bool] = EventChannel("save_click")
        self.rating_confirmation_event: EventChannel[bool] = EventChannel("rating_confirmation")

        self.rating_workflow = RatingWorkflow(
            self.store,
            data_source,
            self.rating_confirmation_event,
            success_status_codes=config.rating.success_status_codes,
        )
        self.aggregator = DetailAggregator(
            self.store,
            data_source,
            self.rating_workflow,
        )
        self.aggregator.add_details_hook(
            watch_history_hook(watch_history, config.watch_history.media_type)
        )

        self.log_context = {"movie_id": movie_id}
        for part in (self.store, self.rating_workflow, self.aggregator):
            part.log_context = self.log_context

    @property
    def state(self) -> ViewState:
        """Current view state snapshot."""
        return self.store.state

    def load(self) -> None:
        """Start loading the page."""
        self.aggregator.load(self.movie_id)

    async def submit_rating(self, value: float) -> Optional[SubmissionResult]:
        """Rate the movie shown by the page."""
        return await self.rating_workflow.submit(self.movie_id, value)

    async def wait_until_settled(self) -> None:
        """Wait until every source has resolved."""
        await self.aggregator.wait_until_settled()

    def on_click_back(self) -> None:
        self.back_event.emit(True)

    def on_click_movie(self, movie_id: int) -> None:
        self.movie_click_event.emit(movie_id)

    def on_click_actor(self, actor_id: int) -> None:
        self.cast_click_event.emit(actor_id)

    def on_click_play_trailer(self) -> None:
        self.trailer_click_event.emit(True)

    def on_click_view_reviews(self) -> None:
        self.reviews_click_event.emit(True)

    def on_click_save(self) -> None:
        self.save_click_event.emit(True)

    def close(self) -> None:
        """Tear the page down.

        In-flight fetches are cancelled and the store stops accepting
        updates. Watch history writes already started are left running.
        """
        self.logger.debug("Closing details page")
        self.aggregator.cancel()
        self.store.close()

    async def __aenter__(self) -> "MovieDetailsPage":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        self.close()
