"""Main CLI entry point."""

import asyncio
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from .. import __version__
from ..config import ConfigManager
from ..core.interfaces import IWatchHistoryStore
from ..core.models import (
    CastSection,
    CommentSection,
    HeaderSection,
    RatingControlSection,
    ReviewTextSection,
    Section,
    SeeAllReviewsButtonSection,
    SimilarMoviesSection,
    ViewState,
)
from ..infrastructure import Container, get_logger, setup_logging
from ..utils import ConfigurationError, MovieDetailsError

logger = get_logger(__name__)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="movie-details")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Movie Details - Browse and rate a movie's detail page from TMDb."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    # Tests may inject a preconfigured container
    if "container" in ctx.obj:
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("movie_id", type=int)
@click.pass_context
def show(ctx: click.Context, movie_id: int) -> None:
    """Load and print the detail page of a movie."""
    container = ctx.obj["container"]

    try:
        state = asyncio.run(_load_page(container, movie_id))
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except MovieDetailsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _display_state(state)


@cli.command()
@click.argument("movie_id", type=int)
@click.argument("value", type=float)
@click.pass_context
def rate(ctx: click.Context, movie_id: int, value: float) -> None:
    """Rate a movie."""
    container = ctx.obj["container"]
    rating_config = container.get_config().rating

    if not rating_config.min_value <= value <= rating_config.max_value:
        click.echo(
            f"Rating must be between {rating_config.min_value} and {rating_config.max_value}",
            err=True,
        )
        sys.exit(2)

    try:
        state, confirmed = asyncio.run(_rate_movie(container, movie_id, value))
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except MovieDetailsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if state.rating_submission is not None:
        submission = state.rating_submission
        click.echo(f"Status {submission.status_code}: {submission.status_message}")
    if state.current_rating is not None:
        click.echo(f"Current rating: {state.current_rating}")
    for error in state.errors:
        click.echo(f"✗ {error.source.value}: {error.message}", err=True)
    if confirmed:
        click.echo("Rating request sent")
    else:
        click.echo("Rating unchanged, nothing submitted")


@cli.command()
@click.option("--limit", "-n", type=int, default=20, show_default=True, help="Entries to show")
@click.pass_context
def history(ctx: click.Context, limit: int) -> None:
    """Show the watch history."""
    container = ctx.obj["container"]
    store = container.get(IWatchHistoryStore)

    try:
        entries = asyncio.run(store.list_views(limit))
    except MovieDetailsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not entries:
        click.echo("Watch history is empty")
        return

    for entry in entries:
        year = f" ({entry.release_date.year})" if entry.release_date else ""
        viewed = entry.viewed_at.strftime("%Y-%m-%d %H:%M")
        click.echo(f"{viewed}  [{entry.movie_id}] {entry.title}{year}")


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Please edit the configuration file with your TMDb API key.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


async def _load_page(container: Container, movie_id: int) -> ViewState:
    """Load a page and return its settled state."""
    try:
        async with container.create_details_page(movie_id) as page:
            page.load()
            await page.wait_until_settled()
            await page.aggregator.wait_for_side_effects()
            return page.state
    finally:
        await container.close()


async def _rate_movie(
    container: Container, movie_id: int, value: float
) -> Tuple[ViewState, bool]:
    """Load a page, submit a rating and report whether it was confirmed."""
    try:
        async with container.create_details_page(movie_id) as page:
            page.load()
            await page.wait_until_settled()
            result = await page.submit_rating(value)
            logger.debug(f"Rating submission for movie {movie_id} returned {result}")
            confirmed = page.rating_confirmation_event.consume() is True
            await page.aggregator.wait_for_side_effects()
            return page.state, confirmed
    finally:
        await container.close()


def _display_state(state: ViewState) -> None:
    """Print sections in the order they resolved."""
    for section in state.sections:
        _display_section(section)

    if state.errors:
        click.echo("")
        for error in state.errors:
            click.echo(f"✗ {error.source.value}: {error.message}", err=True)


def _display_section(section: Section) -> None:
    if isinstance(section, HeaderSection):
        details = section.details
        year = f" ({details.release_date.year})" if details.release_date else ""
        click.echo(f"{details.title}{year}")
        click.echo("=" * 70)
        if details.genres:
            click.echo(f"Genres: {', '.join(details.genres)}")
        if details.duration:
            click.echo(f"Runtime: {details.duration} min")
        if details.vote_average is not None:
            click.echo(f"Rating: {details.vote_average:.1f}/10")
        if details.overview:
            click.echo(f"\n{details.overview}")
    elif isinstance(section, CastSection):
        names = ", ".join(actor.name for actor in section.cast[:10])
        click.echo(f"\nCast: {names}")
    elif isinstance(section, SimilarMoviesSection):
        titles = ", ".join(media.title for media in section.similar[:10])
        click.echo(f"\nSimilar: {titles}")
    elif isinstance(section, RatingControlSection):
        rating = section.current_rating if section.current_rating is not None else "not rated"
        click.echo(f"\nYour rating: {rating}")
    elif isinstance(section, CommentSection):
        review = section.review
        content = review.content if len(review.content) <= 200 else review.content[:197] + "..."
        click.echo(f"\n{review.author}: {content}")
    elif isinstance(section, ReviewTextSection):
        click.echo("-" * 70)
    elif isinstance(section, SeeAllReviewsButtonSection):
        click.echo("[See all reviews]")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
