"""Detail page view state models."""

from enum import Enum
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .movie import (
    ActorRecord,
    DetailsRecord,
    MediaRecord,
    RatingRecord,
    ReviewRecord,
    SubmissionResult,
)


class SectionType(str, Enum):
    """Presentation unit enumeration."""

    HEADER = "header"
    CAST = "cast"
    SIMILAR_MOVIES = "similar_movies"
    RATING_CONTROL = "rating_control"
    COMMENT = "comment"
    REVIEW_TEXT = "review_text"
    SEE_ALL_REVIEWS_BUTTON = "see_all_reviews_button"


class ErrorSource(str, Enum):
    """Source a recorded error came from."""

    DETAILS = "details"
    CAST = "cast"
    SIMILAR = "similar"
    REVIEWS = "reviews"
    RATING_STATUS = "rating_status"
    SUBMISSION = "submission"


class HeaderSection(BaseModel):
    """Header with the movie metadata."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.HEADER] = SectionType.HEADER
    details: DetailsRecord


class CastSection(BaseModel):
    """Horizontal list of cast members."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.CAST] = SectionType.CAST
    cast: Tuple[ActorRecord, ...] = ()


class SimilarMoviesSection(BaseModel):
    """Horizontal list of similar titles."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.SIMILAR_MOVIES] = SectionType.SIMILAR_MOVIES
    similar: Tuple[MediaRecord, ...] = ()


class RatingControlSection(BaseModel):
    """Rating bar, seeded with the reconciled rating."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.RATING_CONTROL] = SectionType.RATING_CONTROL
    current_rating: Optional[float] = None


class CommentSection(BaseModel):
    """A single review excerpt."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.COMMENT] = SectionType.COMMENT
    review: ReviewRecord


class ReviewTextSection(BaseModel):
    """Marker rendered below the review excerpts."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.REVIEW_TEXT] = SectionType.REVIEW_TEXT


class SeeAllReviewsButtonSection(BaseModel):
    """Button leading to the full review list."""

    model_config = ConfigDict(frozen=True)

    section_type: Literal[SectionType.SEE_ALL_REVIEWS_BUTTON] = (
        SectionType.SEE_ALL_REVIEWS_BUTTON
    )


Section = Union[
    HeaderSection,
    CastSection,
    SimilarMoviesSection,
    RatingControlSection,
    CommentSection,
    ReviewTextSection,
    SeeAllReviewsButtonSection,
]


class ErrorRecord(BaseModel):
    """A failure recorded for one source."""

    model_config = ConfigDict(frozen=True)

    source: ErrorSource = Field(..., description="Failing source")
    message: str = Field(..., description="Error message")


class ViewState(BaseModel):
    """Immutable snapshot of the detail page.

    Snapshots are never modified in place; every change produces a new
    instance through the functions in ``core.state.merges``.
    """

    model_config = ConfigDict(frozen=True)

    is_loading: bool = Field(default=False, description="Details fetch still pending")
    details: Optional[DetailsRecord] = Field(None, description="Core metadata")
    cast: Tuple[ActorRecord, ...] = Field(default=(), description="Cast members")
    similar: Tuple[MediaRecord, ...] = Field(default=(), description="Similar titles")
    reviews: Tuple[ReviewRecord, ...] = Field(default=(), description="Reviews")
    rating_status: Optional[RatingRecord] = Field(None, description="Session and rated titles")
    current_rating: Optional[float] = Field(None, description="Rating attributed to this movie")
    rating_submission: Optional[SubmissionResult] = Field(
        None, description="Result of the last submit attempt"
    )
    sections: Tuple[Section, ...] = Field(default=(), description="Presentation units")
    errors: Tuple[ErrorRecord, ...] = Field(default=(), description="One record per failed source")

    @property
    def section_types(self) -> Tuple[SectionType, ...]:
        """Section types in append order."""
        return tuple(section.section_type for section in self.sections)

    @property
    def error_sources(self) -> Tuple[ErrorSource, ...]:
        """Sources that have failed, in first-failure order."""
        return tuple(error.source for error in self.errors)

    def error_for(self, source: ErrorSource) -> Optional[ErrorRecord]:
        """Get the error recorded for a source, if any."""
        for error in self.errors:
            if error.source == source:
                return error
        return None
