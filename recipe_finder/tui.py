"""Interactive TUI for searching recipes by ingredients."""

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.rule import Rule
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Footer, Header, Input, Static

from .api import RecipeSearchAPI
from .config import DEFAULT_SEARCH_TERMS
from .display import format_pagination, render_recipe_match, status_message
from .highlighter import IngredientHighlighter
from .session import SearchSession, SearchView

HINT = "Write your ingredients and press ENTER to find the most relevant recipes"


def render_terms(terms: Sequence[str]) -> Text:
    """Show the active terms as tags."""
    if not terms:
        return Text("No ingredients", style="dim")
    text = Text()
    for i, term in enumerate(terms):
        if i:
            text.append(" ")
        text.append(f" {term} ", style="reverse")
    return text


def render_results(view: SearchView) -> RenderableType:
    """Render the result list for a view; idle views render nothing."""
    if view.status == "idle":
        return Text("")

    message = status_message(view)
    if message is not None or view.result is None or view.descriptor is None:
        return Text(message or "")

    # Highlight with the terms that produced this result, not the ones being typed
    highlighter = IngredientHighlighter(view.descriptor.terms)
    cards: list[RenderableType] = []
    for match in view.result.values:
        cards.append(render_recipe_match(match, highlighter))
        cards.append(Rule(style="dim"))
    return Group(*cards)


def render_pager(view: SearchView) -> str:
    if view.status != "success" or view.result is None or view.result.is_empty:
        return ""
    return f"{format_pagination(view.result)}   (PgUp/PgDn to change page)"


def step_page(page: int, step: int, total_pages: int | None) -> int | None:
    """Target page after moving by step, or None if it falls outside 1..total_pages."""
    if total_pages is None:
        return None
    target = page + step
    if target < 1 or target > total_pages:
        return None
    return target


class RecipeSearchApp(App[None]):
    """Enter ingredients, browse ranked recipes page by page."""

    CSS = """
    Screen {
        background: $surface;
    }

    #main-container {
        height: 100%;
        padding: 1;
    }

    #hint {
        color: $text-muted;
        content-align: center middle;
        padding-bottom: 1;
    }

    #terms {
        height: auto;
        padding: 1 1;
    }

    .pager {
        height: 1;
        content-align: center middle;
        color: $text-muted;
    }

    #results-scroll {
        height: 1fr;
        margin: 1 0;
    }
    """

    BINDINGS = [
        Binding("pagedown", "next_page", "Next page", priority=True),
        Binding("pageup", "previous_page", "Previous page", priority=True),
        Binding("ctrl+d", "remove_last_term", "Remove last", priority=True),
        Binding("ctrl+l", "clear_terms", "Clear", priority=True),
        Binding("ctrl+r", "refresh", "Retry", priority=True),
        Binding("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        api: RecipeSearchAPI,
        terms: Sequence[str] | None = None,
    ) -> None:
        super().__init__()
        self.api = api
        self.initial_terms = list(DEFAULT_SEARCH_TERMS if terms is None else terms)
        self.search_session = SearchSession(api, on_change=self._on_view_change)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-container"):
            yield Static(HINT, id="hint")
            yield Input(placeholder="Add an ingredient", id="term-input")
            yield Static(render_terms(self.initial_terms), id="terms")
            yield Static("", id="pager-top", classes="pager")
            with VerticalScroll(id="results-scroll"):
                yield Static("", id="results")
            yield Static("", id="pager-bottom", classes="pager")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "It's Dinner Time"
        self._set_terms(self.initial_terms)

    async def on_unmount(self) -> None:
        await self.api.aclose()

    def _set_terms(self, terms: Sequence[str]) -> None:
        self.search_session.set_terms(terms)
        self.query_one("#terms", Static).update(render_terms(self.search_session.terms))

    def _on_view_change(self, view: SearchView) -> None:
        self.query_one("#results", Static).update(render_results(view))
        pager = render_pager(view)
        self.query_one("#pager-top", Static).update(pager)
        self.query_one("#pager-bottom", Static).update(pager)

    @on(Input.Submitted, "#term-input")
    def on_term_submitted(self, event: Input.Submitted) -> None:
        term = event.value.strip()
        event.input.value = ""
        if term:
            self._set_terms([*self.search_session.terms, term])

    def action_remove_last_term(self) -> None:
        if self.search_session.terms:
            self._set_terms(self.search_session.terms[:-1])

    def action_clear_terms(self) -> None:
        self._set_terms([])

    def action_next_page(self) -> None:
        self._step_page(1)

    def action_previous_page(self) -> None:
        self._step_page(-1)

    def _step_page(self, step: int) -> None:
        target = step_page(self.search_session.page_number, step, self.search_session.total_pages)
        if target is None or not self.search_session.terms:
            self.bell()
            return
        self.search_session.set_page(target)

    def action_refresh(self) -> None:
        self.search_session.refresh()


def run_app(api: RecipeSearchAPI, terms: Sequence[str] | None = None) -> None:
    """Launch the interactive recipe search."""
    RecipeSearchApp(api, terms).run()
