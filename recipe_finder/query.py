"""Canonical query descriptors for recipe searches.

A descriptor is both the request sent to the search engine and the key used to
de-duplicate and cache requests, so its encoding must be stable: the same terms
in the same order with the same page always encode identically, and a different
term order is a different query.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode

from .config import PAGE_SIZE


@dataclass(frozen=True, eq=False)
class QueryDescriptor:
    """Immutable search request: ingredient terms, page number and page size."""

    terms: tuple[str, ...]
    page_number: int
    page_size: int = PAGE_SIZE

    @property
    def params(self) -> list[tuple[str, str | int]]:
        """Query parameters in wire order (one entry per term, then paging)."""
        params: list[tuple[str, str | int]] = [
            ("ingredient_search_terms", term) for term in self.terms
        ]
        params.append(("page_number", self.page_number))
        params.append(("page_size", self.page_size))
        return params

    @property
    def encoded(self) -> str:
        """URL-encoded query string; the identity of the descriptor."""
        return urlencode(self.params)

    def url(self, resource_url: str) -> str:
        """Full request URL for the given search resource."""
        return f"{resource_url}?{self.encoded}"

    def with_page(self, page_number: int) -> "QueryDescriptor":
        """Same terms, different page."""
        return build_query(self.terms, page_number)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryDescriptor):
            return NotImplemented
        return self.encoded == other.encoded

    def __hash__(self) -> int:
        return hash(self.encoded)

    def __str__(self) -> str:
        return self.encoded


def build_query(terms: Sequence[str], page: int) -> QueryDescriptor:
    """
    Build the canonical descriptor for a search.

    Terms keep their order and duplicates; the page size is fixed.

    Args:
        terms: Ingredient search terms in display order
        page: 1-based page number

    Returns:
        QueryDescriptor for the request

    Raises:
        ValueError: If page is lower than 1
    """
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError(f"Page number must be a positive integer, got {page!r}")
    return QueryDescriptor(terms=tuple(terms), page_number=page)
