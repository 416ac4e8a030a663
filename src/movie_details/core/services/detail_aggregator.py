"""Detail page aggregation service."""

import asyncio
from typing import Awaitable, Callable, List, Set, TypeVar

from ...infrastructure.logging import LoggerMixin
from ...utils import SourceFetchError
from ..interfaces import IMovieDataSource, IWatchHistoryStore
from ..models import (
    ActorRecord,
    DetailsRecord,
    ErrorRecord,
    ErrorSource,
    MediaRecord,
    RatingRecord,
    ReviewRecord,
    ViewState,
)
from ..state import ViewStateStore, merges
from .rating_workflow import RatingWorkflow

T = TypeVar("T")

DetailsHook = Callable[[DetailsRecord], Awaitable[None]]


def watch_history_hook(store: IWatchHistoryStore, media_type: str = "movie") -> DetailsHook:
    """Build a details hook recording the viewed movie in the watch history.

    Args:
        store: Watch history store.
        media_type: Media type recorded for the entry.

    Returns:
        Hook to pass to ``DetailAggregator``.
    """

    async def record(details: DetailsRecord) -> None:
        await store.record_view(
            movie_id=details.movie_id,
            poster_path=details.image,
            title=details.title,
            duration=details.duration,
            vote_average=details.vote_average,
            release_date=details.release_date,
            media_type=media_type,
        )

    return record


class DetailAggregator(LoggerMixin):
    """Loads the five detail sources of a movie into one view state.

    All sources are fetched concurrently. Each one merges into the store
    on its own as soon as it resolves, appending its sections, so the
    section order is the order in which the sources resolved. A failing
    source records an error and appends nothing; the others carry on.
    """

    def __init__(
        self,
        store: ViewStateStore,
        data_source: IMovieDataSource,
        rating_workflow: RatingWorkflow,
    ) -> None:
        """Initialize detail aggregator.

        Args:
            store: View state store of the page.
            data_source: Remote data source.
            rating_workflow: Rating workflow reconciled on rating status.
        """
        self._store = store
        self._data_source = data_source
        self._rating_workflow = rating_workflow
        self._details_hooks: List[DetailsHook] = []
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._side_effects: Set["asyncio.Task[None]"] = set()

    def add_details_hook(self, hook: DetailsHook) -> None:
        """Register a side effect run after every details merge.

        Hooks run as separate tasks. Their failures are logged and discarded.
        """
        self._details_hooks.append(hook)

    def load(self, movie_id: int) -> None:
        """Start loading every source for a movie.

        Must be called from a running event loop. Returns immediately;
        calling it again issues all fetches again.

        Args:
            movie_id: Movie to load.
        """
        self.logger.info(f"Loading details for movie {movie_id}")
        self._store.update(merges.start_loading)

        self._spawn(
            self._load_source(
                ErrorSource.DETAILS,
                lambda: self._data_source.fetch_details(movie_id),
                self._on_details,
            )
        )
        self._spawn(
            self._load_source(
                ErrorSource.CAST,
                lambda: self._data_source.fetch_cast(movie_id),
                self._on_cast,
            )
        )
        self._spawn(
            self._load_source(
                ErrorSource.SIMILAR,
                lambda: self._data_source.fetch_similar(movie_id),
                self._on_similar,
            )
        )
        self._spawn(
            self._load_source(
                ErrorSource.RATING_STATUS,
                self._data_source.fetch_rating_status,
                lambda rating_status: self._on_rating_status(movie_id, rating_status),
            )
        )
        self._spawn(
            self._load_source(
                ErrorSource.REVIEWS,
                lambda: self._data_source.fetch_reviews(movie_id),
                self._on_reviews,
            )
        )

    @property
    def pending(self) -> bool:
        """Whether any source is still loading."""
        return bool(self._tasks)

    async def wait_until_settled(self) -> None:
        """Wait until every source has merged a result or an error."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def wait_for_side_effects(self) -> None:
        """Wait until every details hook has finished."""
        while self._side_effects:
            await asyncio.gather(*list(self._side_effects), return_exceptions=True)

    def cancel(self) -> None:
        """Cancel in-flight fetches. Details hooks keep running."""
        for task in list(self._tasks):
            task.cancel()

    def _spawn(self, coro: Awaitable[None]) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load_source(
        self,
        source: ErrorSource,
        fetch: Callable[[], Awaitable[T]],
        on_success: Callable[[T], None],
    ) -> None:
        """Await one source and merge its result or its error."""
        try:
            result = await fetch()
        except Exception as e:
            error = SourceFetchError(source.value, e)
            self.logger.error(str(error))
            self._store.update(lambda state: self._merge_failure(state, source, str(error)))
            return

        on_success(result)

    @staticmethod
    def _merge_failure(state: ViewState, source: ErrorSource, message: str) -> ViewState:
        state = merges.merge_error(state, ErrorRecord(source=source, message=message))
        if source == ErrorSource.DETAILS:
            state = merges.finish_loading(state)
        return state

    def _on_details(self, details: DetailsRecord) -> None:
        self._store.update(lambda state: merges.merge_details(state, details))
        if self._store.closed:
            return

        for hook in self._details_hooks:
            task = asyncio.ensure_future(self._run_details_hook(hook, details))
            self._side_effects.add(task)
            task.add_done_callback(self._side_effects.discard)

    async def _run_details_hook(self, hook: DetailsHook, details: DetailsRecord) -> None:
        try:
            await hook(details)
        except Exception as e:
            self.logger.warning(f"Details side effect failed for movie {details.movie_id}: {e}")

    def _on_cast(self, cast: List[ActorRecord]) -> None:
        self._store.update(lambda state: merges.merge_cast(state, cast))

    def _on_similar(self, similar: List[MediaRecord]) -> None:
        self._store.update(lambda state: merges.merge_similar(state, similar))

    def _on_rating_status(self, movie_id: int, rating_status: RatingRecord) -> None:
        def merge(state: ViewState) -> ViewState:
            state = merges.merge_rating_status(state, rating_status)
            state = self._rating_workflow.reconciled(state, rating_status, movie_id)
            return merges.append_rating_control(state)

        state = self._store.update(merge)
        self._rating_workflow.adopt(state, rating_status, movie_id)

    def _on_reviews(self, reviews: List[ReviewRecord]) -> None:
        self._store.update(lambda state: merges.merge_reviews(state, reviews))
