"""Core data models."""

from .movie import (
    ActorRecord,
    DetailsRecord,
    MediaRecord,
    RatedMovie,
    RatingRecord,
    ReviewRecord,
    SubmissionResult,
    WatchHistoryEntry,
)
from .view_state import (
    CastSection,
    CommentSection,
    ErrorRecord,
    ErrorSource,
    HeaderSection,
    RatingControlSection,
    ReviewTextSection,
    Section,
    SectionType,
    SeeAllReviewsButtonSection,
    SimilarMoviesSection,
    ViewState,
)

__all__ = [
    "DetailsRecord",
    "ActorRecord",
    "MediaRecord",
    "ReviewRecord",
    "RatedMovie",
    "RatingRecord",
    "SubmissionResult",
    "WatchHistoryEntry",
    "ViewState",
    "Section",
    "SectionType",
    "HeaderSection",
    "CastSection",
    "SimilarMoviesSection",
    "RatingControlSection",
    "CommentSection",
    "ReviewTextSection",
    "SeeAllReviewsButtonSection",
    "ErrorRecord",
    "ErrorSource",
]
