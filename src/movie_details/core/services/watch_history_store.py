"""JSON-lines watch history store."""

from collections import OrderedDict
from datetime import date
from pathlib import Path
from typing import List, Optional

import aiofiles
from pydantic import ValidationError

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import WatchHistoryError
from ..interfaces import IWatchHistoryStore
from ..models import WatchHistoryEntry


class JsonlWatchHistoryStore(IWatchHistoryStore, LoggerMixin):
    """Watch history kept as an append-only JSON-lines file.

    Viewing a title again appends a new line; readers keep the latest
    line per title, so a re-viewed title moves to the top.
    """

    def __init__(self, config: Config) -> None:
        """Initialize watch history store.

        Args:
            config: Application configuration.
        """
        self._path = Path(config.watch_history.path)

    @property
    def path(self) -> Path:
        """History file path."""
        return self._path

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
        """Append a viewed title to the history file."""
        entry = WatchHistoryEntry(
            movie_id=movie_id,
            poster_path=poster_path,
            title=title,
            duration=duration,
            vote_average=vote_average,
            release_date=release_date,
            media_type=media_type,
        )

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self._path, "a", encoding="utf-8") as f:
                await f.write(entry.model_dump_json() + "\n")
        except OSError as e:
            error_msg = f"Failed to record movie {movie_id} in watch history: {e}"
            self.logger.error(error_msg)
            raise WatchHistoryError(error_msg) from e

        self.logger.debug(f"Recorded movie {movie_id} in watch history")

    async def list_views(self, limit: Optional[int] = None) -> List[WatchHistoryEntry]:
        """List viewed titles, most recent first."""
        if not self._path.exists():
            return []

        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            error_msg = f"Failed to read watch history {self._path}: {e}"
            self.logger.error(error_msg)
            raise WatchHistoryError(error_msg) from e

        latest: "OrderedDict[int, WatchHistoryEntry]" = OrderedDict()
        for line_number, line in enumerate(content.splitlines(), 1):
            if not line.strip():
                continue
            try:
                entry = WatchHistoryEntry.model_validate_json(line)
            except ValidationError as e:
                self.logger.warning(f"Skipping malformed watch history line {line_number}: {e}")
                continue
            latest.pop(entry.movie_id, None)
            latest[entry.movie_id] = entry

        entries = list(reversed(latest.values()))
        if limit is not None:
            entries = entries[:limit]
        return entries
