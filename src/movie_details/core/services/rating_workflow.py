"""Rating workflow: reconciliation and guarded submission."""

import asyncio
from typing import Iterable, Optional

from ...infrastructure.logging import LoggerMixin
from ...utils import SubmissionError
from ..interfaces import IMovieDataSource
from ..models import ErrorRecord, ErrorSource, RatingRecord, SubmissionResult, ViewState
from ..state import EventChannel, ViewStateStore, merges


class RatingWorkflow(LoggerMixin):
    """Owns the current rating of one movie and submits changes to it.

    ``last_submitted_rating`` is the submission guard: submitting the
    value it holds is a no-op. It only advances when the service reports
    success, so a failed attempt can be retried with the same value.
    """

    def __init__(
        self,
        store: ViewStateStore,
        data_source: IMovieDataSource,
        confirmation: EventChannel[bool],
        success_status_codes: Iterable[int] = (1, 12),
    ) -> None:
        """Initialize rating workflow.

        Args:
            store: View state store of the page.
            data_source: Remote data source.
            confirmation: Channel signalled after every submission attempt.
            success_status_codes: Status codes meaning the rating was stored.
        """
        self._store = store
        self._data_source = data_source
        self._confirmation = confirmation
        self._success_status_codes = frozenset(success_status_codes)
        self._last_submitted_rating: Optional[float] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def last_submitted_rating(self) -> Optional[float]:
        """Last rating known to be stored remotely."""
        return self._last_submitted_rating

    def reconcile(self, rating_status: RatingRecord, movie_id: int) -> None:
        """Reconcile the current rating against a fetched rating status.

        Args:
            rating_status: Freshly fetched rating status.
            movie_id: Movie shown on the page.
        """
        state = self._store.update(lambda state: self.reconciled(state, rating_status, movie_id))
        self.adopt(state, rating_status, movie_id)

    def reconciled(
        self, state: ViewState, rating_status: RatingRecord, movie_id: int
    ) -> ViewState:
        """Merge step used by ``reconcile``.

        Pure, so the rating status merge, the reconciliation and the
        rating control section can be published as one snapshot. Call
        ``adopt`` with the published snapshot afterwards.
        """
        rated = rating_status.rating_for(movie_id)
        if rated is None or rated == state.current_rating:
            return state
        return merges.merge_current_rating(state, rated)

    def adopt(self, state: ViewState, rating_status: RatingRecord, movie_id: int) -> None:
        """Take a reconciled rating as the submission guard.

        Args:
            state: Snapshot published by the reconciling update.
            rating_status: Rating status that was reconciled.
            movie_id: Movie shown on the page.
        """
        rated = rating_status.rating_for(movie_id)
        if rated is None or state.current_rating != rated:
            return

        self.logger.debug(f"Movie {movie_id} already rated {rated}")
        self._last_submitted_rating = rated

    async def submit(self, movie_id: int, value: float) -> Optional[SubmissionResult]:
        """Submit a rating.

        Does nothing when ``value`` equals the last submitted rating.
        Otherwise writes the rating, refreshes the rating status to pick
        up the session identifier, records the result and signals the
        confirmation channel whether or not the write succeeded.

        Args:
            movie_id: Movie to rate.
            value: Rating value.

        Returns:
            The service result, or None if nothing was written or the
            write failed.
        """
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if value == self._last_submitted_rating:
                self.logger.debug(f"Rating {value} for movie {movie_id} unchanged, skipping")
                return None

            try:
                return await self._submit(movie_id, value)
            finally:
                self._confirmation.emit(True)

    async def _submit(self, movie_id: int, value: float) -> Optional[SubmissionResult]:
        rating_status = self._store.state.rating_status
        session_id = rating_status.session_id if rating_status else ""

        result: Optional[SubmissionResult] = None
        try:
            result = await self._data_source.submit_rating(movie_id, value, session_id)
        except Exception as e:
            error = SubmissionError(f"Failed to submit rating {value} for movie {movie_id}: {e}")
            self.logger.error(str(error))
            self._store.update(
                lambda state: merges.merge_error(
                    state, ErrorRecord(source=ErrorSource.SUBMISSION, message=str(error))
                )
            )

        await self._refresh_rating_status()

        if result is None:
            return None

        self._store.update(lambda state: merges.merge_submission(state, result))
        if result.status_code in self._success_status_codes:
            self.logger.info(f"Rated movie {movie_id} with {value}")
            self._last_submitted_rating = value
            self._store.update(lambda state: merges.merge_current_rating(state, value))
        else:
            self.logger.warning(
                f"Rating movie {movie_id} returned status {result.status_code}: "
                f"{result.status_message}"
            )
        return result

    async def _refresh_rating_status(self) -> None:
        """Fetch the rating status again so the next write uses a fresh session."""
        try:
            rating_status = await self._data_source.fetch_rating_status()
        except Exception as e:
            self.logger.warning(f"Failed to refresh rating status: {e}")
            return
        self._store.update(lambda state: merges.merge_rating_status(state, rating_status))
