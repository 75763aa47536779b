"""Highlighting of search terms inside recipe ingredient lines.

A term highlights wherever it occurs as a whole word, case-insensitively: the
match must be delimited by ``\\b`` word boundaries (Python ``re`` semantics on
``str``, so accented letters count as word characters). "egg" therefore
highlights in "1 egg, beaten" but not in "2 eggs" or "eggplant". Terms are
escaped before compiling, so characters like ``+`` or ``(`` match literally.

Highlighting is display-only; the number of unmatched ingredients shown for a
recipe always comes from the search engine.
"""

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .models import Recipe

Span = tuple[int, int]


@dataclass(frozen=True)
class HighlightAnnotation:
    """Highlighted character ranges of one ingredient line."""

    text: str
    spans: tuple[Span, ...] = ()

    @property
    def is_fully_unmatched(self) -> bool:
        return not self.spans

    @property
    def matched_words(self) -> list[str]:
        return [self.text[start:end] for start, end in self.spans]

    def segments(self) -> Iterator[tuple[str, bool]]:
        """Split the line into ordered (chunk, highlighted) pieces covering all of it."""
        position = 0
        for start, end in self.spans:
            if start > position:
                yield self.text[position:start], False
            yield self.text[start:end], True
            position = end
        if position < len(self.text):
            yield self.text[position:], False


def compile_term_pattern(term: str) -> re.Pattern[str] | None:
    """Compile the whole-word pattern for a term, or None for a blank term."""
    if not term.strip():
        return None
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def merge_spans(spans: Iterable[Span]) -> tuple[Span, ...]:
    """Union overlapping or touching ranges into sorted, disjoint ranges."""
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return tuple((start, end) for start, end in merged)


class IngredientHighlighter:
    """Finds the active search terms in ingredient lines.

    Patterns are compiled once per set of terms and reused for every line.
    """

    def __init__(self, terms: Sequence[str]):
        self.terms = tuple(terms)
        self._patterns = [
            pattern for pattern in map(compile_term_pattern, self.terms) if pattern is not None
        ]

    def annotate(self, text: str) -> HighlightAnnotation:
        spans = []
        for pattern in self._patterns:
            for match in pattern.finditer(text):
                if match.end() > match.start():
                    spans.append(match.span())
        return HighlightAnnotation(text=text, spans=merge_spans(spans))

    def annotate_recipe(self, recipe: Recipe) -> list[HighlightAnnotation]:
        return [self.annotate(ingredient) for ingredient in recipe.ingredients]


def annotate(terms: Sequence[str], text: str) -> HighlightAnnotation:
    """
    Highlight every whole-word, case-insensitive occurrence of any term in a line.

    Args:
        terms: Active search terms
        text: One ingredient line

    Returns:
        HighlightAnnotation with merged spans; no spans means nothing matched
    """
    return IngredientHighlighter(terms).annotate(text)


def annotate_recipe(terms: Sequence[str], recipe: Recipe) -> list[HighlightAnnotation]:
    """Annotate each ingredient line of a recipe, in order."""
    return IngredientHighlighter(terms).annotate_recipe(recipe)


def count_unhighlighted(annotations: Iterable[HighlightAnnotation]) -> int:
    """Number of lines with no highlighted term (display aid only)."""
    return sum(1 for annotation in annotations if annotation.is_fully_unmatched)
