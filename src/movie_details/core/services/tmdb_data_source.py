"""TMDb implementation of the movie data source."""

import asyncio
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import DataSourceError
from ..interfaces import IMovieDataSource
from ..models import (
    ActorRecord,
    DetailsRecord,
    MediaRecord,
    RatedMovie,
    RatingRecord,
    ReviewRecord,
    SubmissionResult,
)


class TMDbStatusError(DataSourceError):
    """TMDb answered with an error status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(f"TMDb returned status {status}: {message}")

    @property
    def retryable(self) -> bool:
        """Whether the request may succeed if sent again."""
        return self.status == 429 or self.status >= 500


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, TMDbStatusError):
        return error.retryable
    return isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError))


class TMDbDataSource(IMovieDataSource, LoggerMixin):
    """Movie data source backed by the TMDb v3 API.

    Read requests are retried with exponential backoff on connection
    errors, timeouts, 429 and 5xx responses. Rating writes are sent once.
    When no user session is configured a guest session is created on
    first use and kept for the lifetime of the data source.
    """

    def __init__(self, config: Config) -> None:
        """Initialize TMDb data source.

        Args:
            config: Application configuration.
        """
        self._tmdb_config = config.tmdb
        self._session: Optional[aiohttp.ClientSession] = None
        self._guest_session_id: Optional[str] = None
        self._retry_wait = wait_exponential(multiplier=0.5, max=4)

    async def fetch_details(self, movie_id: int) -> DetailsRecord:
        """Get core metadata for a movie."""
        try:
            data = await self._get(f"/movie/{movie_id}")
            return self._parse_details(data)
        except Exception as e:
            error_msg = f"Failed to get details for movie {movie_id}: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def fetch_cast(self, movie_id: int) -> List[ActorRecord]:
        """Get the cast of a movie."""
        try:
            data = await self._get(f"/movie/{movie_id}/credits")
            return [
                ActorRecord(
                    actor_id=item["id"],
                    name=item.get("name", ""),
                    image=self._image_url(item.get("profile_path")),
                    character=item.get("character"),
                )
                for item in data.get("cast", [])
            ]
        except Exception as e:
            error_msg = f"Failed to get cast for movie {movie_id}: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def fetch_similar(self, movie_id: int) -> List[MediaRecord]:
        """Get titles similar to a movie."""
        try:
            data = await self._get(f"/movie/{movie_id}/similar")
            return [
                MediaRecord(
                    media_id=item["id"],
                    title=item.get("title") or item.get("name", ""),
                    image=self._image_url(item.get("poster_path")),
                    release_date=self._parse_date(item.get("release_date")),
                    vote_average=item.get("vote_average"),
                    media_type="movie",
                )
                for item in data.get("results", [])
            ]
        except Exception as e:
            error_msg = f"Failed to get similar movies for movie {movie_id}: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def fetch_reviews(self, movie_id: int) -> List[ReviewRecord]:
        """Get user reviews of a movie."""
        try:
            data = await self._get(f"/movie/{movie_id}/reviews")
            return [
                ReviewRecord(
                    author=item.get("author", ""),
                    content=item.get("content", ""),
                    created_at=self._parse_datetime(item.get("created_at")),
                )
                for item in data.get("results", [])
            ]
        except Exception as e:
            error_msg = f"Failed to get reviews for movie {movie_id}: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def fetch_rating_status(self) -> RatingRecord:
        """Get the current session and every title it has rated."""
        try:
            session_id, is_guest = await self._ensure_session()
            if is_guest:
                path = f"/guest_session/{session_id}/rated/movies"
                params: Dict[str, str] = {}
            else:
                path = f"/account/{self._tmdb_config.account_id}/rated/movies"
                params = {"session_id": session_id}

            rated: List[RatedMovie] = []
            page = 1
            while True:
                try:
                    data = await self._get(path, {**params, "page": str(page)})
                except TMDbStatusError as e:
                    # Guest sessions without ratings have no rated list yet
                    if is_guest and e.status == 404:
                        break
                    raise

                rated.extend(self._parse_rated(item) for item in data.get("results", []))
                if page >= int(data.get("total_pages") or 1):
                    break
                page += 1

            return RatingRecord(session_id=session_id, rated=rated)
        except Exception as e:
            error_msg = f"Failed to get rating status: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def submit_rating(
        self, movie_id: int, value: float, session_id: str
    ) -> SubmissionResult:
        """Rate a movie."""
        try:
            if session_id and session_id == self._guest_session_id:
                params = {"guest_session_id": session_id}
            else:
                params = {"session_id": session_id}

            data = await self._request(
                "POST", f"/movie/{movie_id}/rating", params=params, json={"value": value}
            )
            return SubmissionResult(
                status_code=data.get("status_code") or 0,
                status_message=data.get("status_message") or "",
            )
        except Exception as e:
            error_msg = f"Failed to rate movie {movie_id}: {e}"
            self.logger.error(error_msg)
            raise DataSourceError(error_msg) from e

    async def _ensure_session(self) -> Tuple[str, bool]:
        """Get the session to rate with.

        Returns:
            Session identifier and whether it is a guest session.
        """
        if self._tmdb_config.session_id:
            return self._tmdb_config.session_id, False

        if self._guest_session_id is None:
            data = await self._get("/authentication/guest_session/new")
            guest_session_id = data.get("guest_session_id")
            if not data.get("success") or not guest_session_id:
                raise DataSourceError("TMDb did not create a guest session")
            self._guest_session_id = guest_session_id
            self.logger.info("Created TMDb guest session")

        return self._guest_session_id, True

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Send a GET request, retrying transient failures.

        Args:
            path: API path below the base URL.
            params: Extra query parameters.

        Returns:
            Decoded JSON body.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._tmdb_config.retry_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._request("GET", path, params=params)
        raise DataSourceError(f"No attempt made for {path}")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send one request to TMDb.

        Raises:
            TMDbStatusError: If TMDb answers with an error status.
            DataSourceError: If the body is not a JSON object.
        """
        url = f"{self._tmdb_config.base_url}{path}"
        query = {"api_key": self._tmdb_config.api_key, "language": self._tmdb_config.language}
        if params:
            query.update(params)

        async with self._get_session().request(method, url, params=query, json=json) as response:
            if response.status >= 400:
                message = await response.text()
                try:
                    body = await response.json(content_type=None)
                    if isinstance(body, dict) and body.get("status_message"):
                        message = body["status_message"]
                except ValueError:
                    pass
                raise TMDbStatusError(response.status, message)

            data = await response.json(content_type=None)
            if not isinstance(data, dict):
                raise DataSourceError(f"Unexpected response body for {method} {path}")
            return data

    def _parse_details(self, data: Dict[str, Any]) -> DetailsRecord:
        return DetailsRecord(
            movie_id=data["id"],
            image=self._image_url(data.get("poster_path")),
            title=data.get("title", ""),
            release_date=self._parse_date(data.get("release_date")),
            genres=[g["name"] for g in data.get("genres", [])],
            duration=data.get("runtime"),
            overview=data.get("overview"),
            vote_average=data.get("vote_average"),
            vote_count=data.get("vote_count"),
            media_type="movie",
        )

    def _parse_rated(self, data: Dict[str, Any]) -> RatedMovie:
        return RatedMovie(
            movie_id=data["id"],
            title=data.get("title", ""),
            rating=data.get("rating", 0.0),
            image=self._image_url(data.get("poster_path")),
            release_date=self._parse_date(data.get("release_date")),
            media_type="movie",
        )

    def _image_url(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        return f"{self._tmdb_config.image_base_url}{path}"

    @staticmethod
    def _parse_date(value: Optional[str]) -> Optional[date]:
        if not value:
            return None
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            return None

    @staticmethod
    def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
        if not value:
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._tmdb_config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "TMDbDataSource":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
