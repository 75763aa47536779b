"""CLI entry point for Recipe Finder."""

import asyncio
import logging

import click

from . import __version__
from .api import RecipeSearchAPI
from .display import echo_result, status_message
from .session import SearchSession, SearchView

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


async def run_search(api: RecipeSearchAPI, terms: tuple[str, ...], page: int) -> SearchView:
    """Run one search through a session and return its final view."""
    async with api:
        session = SearchSession(api)
        session.set_terms(terms)
        await session.settle()
        if page != 1 and session.current_view().status == "success":
            session.set_page(page)
            await session.settle()
        return session.current_view()


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="recipe-finder")
def cli():
    """Find the most relevant recipes for the ingredients you have.

    The recipe search engine is reached at RECIPE_API_BASE_URL (or --api-url).
    """
    pass


@cli.command()
@click.argument("terms", nargs=-1)
@click.option("--api-url", envvar="RECIPE_API_BASE_URL", help="Recipe API base URL")
def browse(terms: tuple[str, ...], api_url: str | None):
    """Search interactively, starting from TERMS (or a default set)."""
    from .tui import run_app

    run_app(RecipeSearchAPI(base_url=api_url), list(terms) if terms else None)


@cli.command()
@click.argument("terms", nargs=-1, required=True)
@click.option("--page", "-p", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--api-url", envvar="RECIPE_API_BASE_URL", help="Recipe API base URL")
@click.option("--verbose", "-v", count=True, help="Increase log output (-vv for debug)")
def search(terms: tuple[str, ...], page: int, api_url: str | None, verbose: int):
    """Print one page of recipes matching TERMS, with matched ingredients highlighted."""
    logging.basicConfig(
        level=LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    api = RecipeSearchAPI(base_url=api_url)
    try:
        view = asyncio.run(run_search(api, terms, page))
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    message = status_message(view)
    if view.status == "error":
        click.echo(message, err=True)
        raise SystemExit(1)
    if message is not None or view.result is None:
        click.echo(message)
        return

    echo_result(view.result, terms)


if __name__ == "__main__":
    cli()
