"""Pure merge functions producing new view state snapshots.

Each function takes the previous snapshot plus one source's result and
returns a new snapshot. A merge only reads and writes the fields owned by
its source (plus ``is_loading``, ``sections`` and ``errors``), so it can
never fail because a sibling source has not resolved.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import (
    ActorRecord,
    CastSection,
    CommentSection,
    DetailsRecord,
    ErrorRecord,
    HeaderSection,
    MediaRecord,
    RatingControlSection,
    RatingRecord,
    ReviewRecord,
    ReviewTextSection,
    Section,
    SeeAllReviewsButtonSection,
    SimilarMoviesSection,
    SubmissionResult,
    ViewState,
)

MAX_COMMENT_SECTIONS = 3


def start_loading(state: ViewState) -> ViewState:
    """Mark the page as loading."""
    return state.model_copy(update={"is_loading": True})


def finish_loading(state: ViewState) -> ViewState:
    """Mark the page as no longer loading."""
    return state.model_copy(update={"is_loading": False})


def append_sections(state: ViewState, sections: Iterable[Section]) -> ViewState:
    """Append presentation units to the end of the section list."""
    new_sections = tuple(sections)
    if not new_sections:
        return state
    return state.model_copy(update={"sections": state.sections + new_sections})


def merge_details(state: ViewState, details: DetailsRecord) -> ViewState:
    """Merge core metadata and append the header."""
    state = state.model_copy(update={"details": details, "is_loading": False})
    return append_sections(state, [HeaderSection(details=details)])


def merge_cast(state: ViewState, cast: Sequence[ActorRecord]) -> ViewState:
    """Merge the cast list and append the cast section."""
    cast_tuple = tuple(cast)
    state = state.model_copy(update={"cast": cast_tuple, "is_loading": False})
    return append_sections(state, [CastSection(cast=cast_tuple)])


def merge_similar(state: ViewState, similar: Sequence[MediaRecord]) -> ViewState:
    """Merge similar titles and append the similar movies section."""
    similar_tuple = tuple(similar)
    state = state.model_copy(update={"similar": similar_tuple, "is_loading": False})
    return append_sections(state, [SimilarMoviesSection(similar=similar_tuple)])


def review_sections(reviews: Sequence[ReviewRecord]) -> Tuple[Section, ...]:
    """Build the review sections for a list of reviews.

    No sections for an empty list. Otherwise one comment per review up to
    ``MAX_COMMENT_SECTIONS``, the review text marker, and the "see all"
    button only when some reviews did not fit.
    """
    if not reviews:
        return ()

    sections: List[Section] = [
        CommentSection(review=review) for review in reviews[:MAX_COMMENT_SECTIONS]
    ]
    sections.append(ReviewTextSection())
    if len(reviews) > MAX_COMMENT_SECTIONS:
        sections.append(SeeAllReviewsButtonSection())
    return tuple(sections)


def merge_reviews(state: ViewState, reviews: Sequence[ReviewRecord]) -> ViewState:
    """Merge reviews and append their sections."""
    reviews_tuple = tuple(reviews)
    state = state.model_copy(update={"reviews": reviews_tuple, "is_loading": False})
    return append_sections(state, review_sections(reviews_tuple))


def merge_rating_status(state: ViewState, rating_status: RatingRecord) -> ViewState:
    """Merge the rating status (session identifier and rated titles)."""
    return state.model_copy(update={"rating_status": rating_status, "is_loading": False})


def merge_current_rating(state: ViewState, rating: Optional[float]) -> ViewState:
    """Set the rating attributed to this movie."""
    return state.model_copy(update={"current_rating": rating})


def append_rating_control(state: ViewState) -> ViewState:
    """Append the rating control seeded with the current rating."""
    return append_sections(state, [RatingControlSection(current_rating=state.current_rating)])


def merge_submission(state: ViewState, result: SubmissionResult) -> ViewState:
    """Record the result of the last rating submission."""
    return state.model_copy(update={"rating_submission": result})


def merge_error(state: ViewState, error: ErrorRecord) -> ViewState:
    """Record an error, replacing any earlier error from the same source."""
    errors = list(state.errors)
    for index, existing in enumerate(errors):
        if existing.source == error.source:
            errors[index] = error
            break
    else:
        errors.append(error)
    return state.model_copy(update={"errors": tuple(errors)})
