"""End-to-end tests of the detail page."""

import pytest
from pydantic import ValidationError

from movie_details.core.interfaces import IWatchHistoryStore
from movie_details.core.models import ErrorSource, RatedMovie, SectionType


@pytest.mark.integration
@pytest.mark.asyncio
async def test_reviews_and_rating_status_fail(integration_container, data_source):
    """Details, cast and similar render; reviews and rating status are errors."""
    data_source.fail("reviews")
    data_source.fail("rating_status")

    async with integration_container.create_details_page(42) as page:
        page.load()
        await page.wait_until_settled()
        state = page.state

    assert sorted(state.section_types) == sorted(
        [SectionType.HEADER, SectionType.CAST, SectionType.SIMILAR_MOVIES]
    )
    assert len(state.errors) == 2
    assert set(state.error_sources) == {ErrorSource.REVIEWS, ErrorSource.RATING_STATUS}
    assert state.current_rating is None
    assert state.rating_status is None
    assert state.is_loading is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_load_rate_and_history(integration_container, data_source):
    """A full visit reconciles, rates and lands in the watch history."""
    data_source.rated = [RatedMovie(movie_id=42, rating=5.0)]

    page = integration_container.create_details_page(42)
    page.load()
    await page.wait_until_settled()
    await page.aggregator.wait_for_side_effects()

    assert page.state.current_rating == 5.0
    assert await page.submit_rating(5.0) is None
    assert not page.rating_confirmation_event.pending

    result = await page.submit_rating(9.0)
    assert result.status_code == 1
    assert page.state.current_rating == 9.0
    assert page.rating_confirmation_event.consume() is True
    assert data_source.submit_calls == [(42, 9.0, "session-1")]
    assert page.state.rating_status.session_id == "session-2"

    page.close()

    history = await integration_container.get(IWatchHistoryStore).list_views()
    assert [entry.movie_id for entry in history] == [42]
    assert history[0].title == "The Answer"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_pages_do_not_share_state(integration_container):
    """Each page gets its own state and event channels."""
    first = integration_container.create_details_page(42)
    second = integration_container.create_details_page(42)

    first.on_click_back()
    first.load()
    await first.wait_until_settled()

    assert second.state.sections == ()
    assert second.back_event.consume() is None
    assert first.back_event.consume() is True

    first.close()
    second.close()


@pytest.mark.integration
def test_click_events_forwarded(integration_container):
    """UI clicks become one-shot events."""
    page = integration_container.create_details_page(42)

    page.on_click_movie(7)
    page.on_click_actor(3)
    page.on_click_play_trailer()
    page.on_click_view_reviews()
    page.on_click_save()

    assert page.movie_click_event.consume() == 7
    assert page.cast_click_event.consume() == 3
    assert page.trailer_click_event.consume() is True
    assert page.reviews_click_event.consume() is True
    assert page.save_click_event.consume() is True
    assert page.save_click_event.consume() is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_published_snapshots_are_read_only(integration_container, data_source):
    """Nested fields of a published snapshot cannot be changed in place."""
    data_source.rated = [RatedMovie(movie_id=42, rating=5.0)]

    page = integration_container.create_details_page(42)
    page.load()
    await page.wait_until_settled()
    snapshot = page.state

    with pytest.raises(AttributeError):
        snapshot.details.genres.append("Injected")
    with pytest.raises(AttributeError):
        snapshot.rating_status.rated.append(RatedMovie(movie_id=7, rating=1.0))
    with pytest.raises(ValidationError):
        snapshot.details.title = "Changed"

    await page.submit_rating(8.0)

    assert page.state.details.genres == ("Science Fiction", "Comedy")
    assert [item.movie_id for item in page.state.rating_status.rated] == [42]
    assert snapshot.details.genres == ("Science Fiction", "Comedy")

    page.close()
