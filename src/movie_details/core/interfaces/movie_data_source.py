"""Movie data source interface."""

from abc import ABC, abstractmethod
from typing import List

from ..models import (
    ActorRecord,
    DetailsRecord,
    MediaRecord,
    RatingRecord,
    ReviewRecord,
    SubmissionResult,
)


class IMovieDataSource(ABC):
    """Interface for the remote sources behind the detail page."""

    @abstractmethod
    async def fetch_details(self, movie_id: int) -> DetailsRecord:
        """Get core metadata for a movie.

        Args:
            movie_id: Movie ID.

        Returns:
            Movie metadata.

        Raises:
            DataSourceError: If request fails.
        """
        pass

    @abstractmethod
    async def fetch_cast(self, movie_id: int) -> List[ActorRecord]:
        """Get the cast of a movie.

        Args:
            movie_id: Movie ID.

        Returns:
            Cast members in billing order.

        Raises:
            DataSourceError: If request fails.
        """
        pass

    @abstractmethod
    async def fetch_similar(self, movie_id: int) -> List[MediaRecord]:
        """Get titles similar to a movie.

        Args:
            movie_id: Movie ID.

        Returns:
            Similar titles.

        Raises:
            DataSourceError: If request fails.
        """
        pass

    @abstractmethod
    async def fetch_reviews(self, movie_id: int) -> List[ReviewRecord]:
        """Get user reviews of a movie.

        Args:
            movie_id: Movie ID.

        Returns:
            Reviews.

        Raises:
            DataSourceError: If request fails.
        """
        pass

    @abstractmethod
    async def fetch_rating_status(self) -> RatingRecord:
        """Get the current session and the titles it has rated.

        Returns:
            Rating status including the session identifier.

        Raises:
            DataSourceError: If request fails.
        """
        pass

    @abstractmethod
    async def submit_rating(
        self, movie_id: int, value: float, session_id: str
    ) -> SubmissionResult:
        """Rate a movie.

        Args:
            movie_id: Movie ID.
            value: Rating value.
            session_id: Session identifier from the rating status.

        Returns:
            Status code and message returned by the service.

        Raises:
            DataSourceError: If request fails.
        """
        pass
