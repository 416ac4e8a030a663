"""Movie-related data models."""

from datetime import date, datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DetailsRecord(BaseModel):
    """Core movie metadata shown in the page header."""

    model_config = ConfigDict(frozen=True)

    movie_id: int = Field(..., description="Movie ID")
    image: Optional[str] = Field(None, description="Poster image URL")
    title: str = Field(..., description="Movie title")
    release_date: Optional[date] = Field(None, description="Release date")
    genres: Tuple[str, ...] = Field(default=(), description="Genre names")
    duration: Optional[int] = Field(None, description="Runtime in minutes")
    overview: Optional[str] = Field(None, description="Movie overview/plot")
    vote_average: Optional[float] = Field(None, description="Average rating")
    vote_count: Optional[int] = Field(None, description="Number of votes")
    media_type: str = Field(default="movie", description="Media type")


class ActorRecord(BaseModel):
    """Cast member."""

    model_config = ConfigDict(frozen=True)

    actor_id: int = Field(..., description="Person ID")
    name: str = Field(..., description="Actor name")
    image: Optional[str] = Field(None, description="Profile image URL")
    character: Optional[str] = Field(None, description="Character played")


class MediaRecord(BaseModel):
    """Similar title card."""

    model_config = ConfigDict(frozen=True)

    media_id: int = Field(..., description="Media ID")
    title: str = Field(..., description="Media title")
    image: Optional[str] = Field(None, description="Poster image URL")
    release_date: Optional[date] = Field(None, description="Release date")
    vote_average: Optional[float] = Field(None, description="Average rating")
    media_type: str = Field(default="movie", description="Media type")


class ReviewRecord(BaseModel):
    """User review."""

    model_config = ConfigDict(frozen=True)

    author: str = Field(default="", description="Review author")
    content: str = Field(..., description="Review text")
    created_at: Optional[datetime] = Field(None, description="Creation time")


class RatedMovie(BaseModel):
    """A title the current session has rated."""

    model_config = ConfigDict(frozen=True)

    movie_id: int = Field(..., description="Movie ID")
    title: str = Field(default="", description="Movie title")
    rating: float = Field(..., description="Rating given by the user")
    image: Optional[str] = Field(None, description="Poster image URL")
    release_date: Optional[date] = Field(None, description="Release date")
    media_type: str = Field(default="movie", description="Media type")


class RatingRecord(BaseModel):
    """Rating status: the session identifier plus the user-rated titles."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(..., description="Session identifier for rating writes")
    rated: Tuple[RatedMovie, ...] = Field(default=(), description="Rated titles")

    def rating_for(self, movie_id: int) -> Optional[float]:
        """Get the rating given to a movie, if any."""
        for item in self.rated:
            if item.movie_id == movie_id:
                return item.rating
        return None


class SubmissionResult(BaseModel):
    """Result returned by a rating write."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(default=0, description="Collaborator status code")
    status_message: str = Field(default="", description="Collaborator status message")


class WatchHistoryEntry(BaseModel):
    """A title recorded in the local watch history."""

    movie_id: int = Field(..., description="Movie ID")
    poster_path: Optional[str] = Field(None, description="Poster image URL")
    title: str = Field(..., description="Movie title")
    duration: Optional[int] = Field(None, description="Runtime in minutes")
    vote_average: Optional[float] = Field(None, description="Average rating")
    release_date: Optional[date] = Field(None, description="Release date")
    media_type: str = Field(default="movie", description="Media type")
    viewed_at: datetime = Field(default_factory=datetime.now, description="When it was viewed")
