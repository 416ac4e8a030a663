"""Watch history store interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from ..models import WatchHistoryEntry


class IWatchHistoryStore(ABC):
    """Interface for the local watch history cache."""

    @abstractmethod
    async def record_view(
        self,
        movie_id: int,
        poster_path: Optional[str],
        title: str,
        duration: Optional[int],
        vote_average: Optional[float],
        release_date: Optional[date],
        media_type: str,
    ) -> None:
        """Record that a title was viewed.

        Raises:
            WatchHistoryError: If the entry cannot be written.
        """
        pass

    @abstractmethod
    async def list_views(self, limit: Optional[int] = None) -> List[WatchHistoryEntry]:
        """List viewed titles, most recent first.

        Args:
            limit: Maximum number of entries to return.

        Returns:
            Watch history entries.

        Raises:
            WatchHistoryError: If the history cannot be read.
        """
        pass
