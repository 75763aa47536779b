"""Shared fixtures for recipe-finder tests."""

import asyncio

import pytest
import respx

from recipe_finder.api import RecipeSearchAPI
from recipe_finder.models import SearchResult

API_BASE_URL = "http://recipes.test"
SEARCH_URL = f"{API_BASE_URL}/api/recipes/search"


def make_recipe(recipe_id, title, ingredients, **extra):
    """Recipe record as returned by the search engine."""
    return {
        "id": recipe_id,
        "title": title,
        "image_url": f"https://images.test/{recipe_id}.jpg",
        "prep_time_mins": extra.get("prep_time_mins", 10),
        "cook_time_mins": extra.get("cook_time_mins", 20),
        "rating": extra.get("rating", 4.5),
        "ingredients": ingredients,
    }


def make_page(values, total_pages=1, page_number=1):
    """Unwrapped result page."""
    return {"values": values, "total_pages": total_pages, "page_number": page_number}


class FakeSearchAPI:
    """In-memory search backend whose answers are released by the test.

    Every call is recorded; each call waits on a future keyed by page number
    until the test resolves or fails it.
    """

    def __init__(self):
        self.calls = []
        self._gates = {}

    def _gate(self, page):
        if page not in self._gates:
            self._gates[page] = asyncio.get_running_loop().create_future()
        return self._gates[page]

    async def search(self, descriptor):
        self.calls.append(descriptor)
        return await self._gate(descriptor.page_number)

    def resolve(self, page, result):
        self._gate(page).set_result(result)

    def fail(self, page, error):
        self._gate(page).set_exception(error)


def page_result(page_number=1, total_pages=3, titles=("Pancakes",)):
    return SearchResult.from_dict(
        make_page(
            [
                {
                    "recipe": make_recipe(i, title, ["1 cup milk", "2 cups flour"]),
                    "unmatched_ingredients": 1,
                }
                for i, title in enumerate(titles, 1)
            ],
            total_pages=total_pages,
            page_number=page_number,
        )
    )


@pytest.fixture
def mock_httpx():
    """Activate respx mock for HTTP requests."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def api_client():
    """Create a RecipeSearchAPI pointed at the test base URL."""
    return RecipeSearchAPI(base_url=API_BASE_URL)


@pytest.fixture
def dessert_page():
    """Two ranked recipes on the first of three pages."""
    return make_page(
        [
            {
                "recipe": make_recipe(
                    1,
                    "Vanilla Yogurt Parfait",
                    ["1 cup Greek yogurt", "1 tsp vanilla extract", "2 tbsp sugar", "1/2 cup granola"],
                ),
                "unmatched_ingredients": 1,
            },
            {
                "recipe": make_recipe(
                    2,
                    "Rice Pudding",
                    ["1 cup rice", "4 cups milk", "1/2 cup sugar", "1 tsp vanilla", "cinnamon"],
                    rating=4.8,
                ),
                "unmatched_ingredients": 2,
            },
        ],
        total_pages=3,
        page_number=1,
    )


@pytest.fixture
def fake_api():
    return FakeSearchAPI()
