"""Formatting of search views for the terminal and the interactive app."""

import click
from rich.console import Group
from rich.text import Text

from .highlighter import HighlightAnnotation, IngredientHighlighter
from .models import RecipeMatch, SearchResult
from .session import SearchView

LOADING_MESSAGE = "Loading..."
NO_RESULTS_MESSAGE = "No recipes found for the ingredients"
HIGHLIGHT_STYLE = "bold black on yellow"


def pluralize(count: int, word: str) -> str:
    """'1 Ingredient', '3 Ingredients'."""
    return f"{count} {word}{'' if count == 1 else 's'}"


def format_ingredient_count(count: int) -> str:
    return pluralize(count, "Ingredient")


def format_missing(unmatched: int) -> str:
    """Label for the engine-reported number of unmatched ingredients."""
    return f"missing {pluralize(unmatched, 'ingredient')}"


def format_minutes(minutes: int | None) -> str:
    return "-" if minutes is None else f"{minutes} minutes"


def format_rating(rating: float | None) -> str:
    return "-" if rating is None else f"{rating}"


def format_pagination(result: SearchResult) -> str:
    return f"Page {result.page_number} of {result.total_pages}"


def status_message(view: SearchView) -> str | None:
    """Message replacing the result list, or None when there are recipes to show."""
    if view.status == "loading":
        return LOADING_MESSAGE
    if view.status == "error" and view.error is not None:
        return f"Error: {view.error.message}"
    if view.is_empty:
        return NO_RESULTS_MESSAGE
    return None


# ============================================================================
# Rich rendering (interactive app)
# ============================================================================


def highlight_text(annotation: HighlightAnnotation, prefix: str = "- ") -> Text:
    """Render an ingredient line with its matched words highlighted."""
    text = Text(prefix)
    for chunk, highlighted in annotation.segments():
        text.append(chunk, style=HIGHLIGHT_STYLE if highlighted else None)
    return text


def render_recipe_match(match: RecipeMatch, highlighter: IngredientHighlighter) -> Group:
    """Render one recipe card: details, highlighted ingredients, missing count."""
    recipe = match.recipe
    header = Text(recipe.title, style="bold")
    details = Text(
        f"preparation time: {format_minutes(recipe.prep_time_mins)}   "
        f"cook time: {format_minutes(recipe.cook_time_mins)}   "
        f"rating: {format_rating(recipe.rating)}",
        style="dim",
    )
    lines = [highlight_text(a) for a in highlighter.annotate_recipe(recipe)]
    return Group(
        header,
        details,
        Text(format_ingredient_count(len(recipe.ingredients)), style="italic"),
        *lines,
        Text(format_missing(match.unmatched_ingredients), style="dim italic", justify="right"),
    )


# ============================================================================
# Plain terminal rendering (CLI)
# ============================================================================


def style_ingredient(annotation: HighlightAnnotation, prefix: str = "- ") -> str:
    """Render an ingredient line with ANSI-highlighted matches."""
    parts = [prefix]
    for chunk, highlighted in annotation.segments():
        parts.append(click.style(chunk, fg="black", bg="yellow", bold=True) if highlighted else chunk)
    return "".join(parts)


def echo_result(result: SearchResult, terms: tuple[str, ...]) -> None:
    """Print a result page with highlighted ingredients."""
    highlighter = IngredientHighlighter(terms)

    click.echo(format_pagination(result))
    for i, match in enumerate(result.values, 1):
        recipe = match.recipe
        click.echo()
        click.echo("=" * 60)
        click.echo(f"{i}. {recipe.title}")
        click.echo("=" * 60)
        click.echo(
            f"Preparation: {format_minutes(recipe.prep_time_mins)} | "
            f"Cook: {format_minutes(recipe.cook_time_mins)} | "
            f"Rating: {format_rating(recipe.rating)}"
        )
        click.echo(format_ingredient_count(len(recipe.ingredients)))
        for annotation in highlighter.annotate_recipe(recipe):
            click.echo(f"  {style_ingredient(annotation)}")
        click.echo(format_missing(match.unmatched_ingredients))

    click.echo()
    click.echo(format_pagination(result))
