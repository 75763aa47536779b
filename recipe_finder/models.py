"""Data types returned by the recipe search engine."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Recipe:
    """A recipe as listed in search results."""

    id: int | str
    title: str
    ingredients: tuple[str, ...] = ()
    image_url: str | None = None
    prep_time_mins: int | None = None
    cook_time_mins: int | None = None
    rating: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert recipe to its wire representation."""
        return {
            "id": self.id,
            "title": self.title,
            "image_url": self.image_url,
            "prep_time_mins": self.prep_time_mins,
            "cook_time_mins": self.cook_time_mins,
            "rating": self.rating,
            "ingredients": list(self.ingredients),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        """Create recipe from dictionary."""
        ingredients = data["ingredients"]
        if not isinstance(ingredients, list):
            raise TypeError("Recipe ingredients must be a list")
        return cls(
            id=data["id"],
            title=data["title"],
            ingredients=tuple(str(ing) for ing in ingredients),
            image_url=data.get("image_url"),
            prep_time_mins=data.get("prep_time_mins"),
            cook_time_mins=data.get("cook_time_mins"),
            rating=data.get("rating"),
        )


@dataclass(frozen=True)
class RecipeMatch:
    """A ranked recipe plus the number of its ingredients the search did not cover.

    The unmatched count comes from the search engine and is shown as-is.
    """

    recipe: Recipe
    unmatched_ingredients: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipe": self.recipe.to_dict(),
            "unmatched_ingredients": self.unmatched_ingredients,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecipeMatch":
        return cls(
            recipe=Recipe.from_dict(data["recipe"]),
            unmatched_ingredients=int(data["unmatched_ingredients"]),
        )


@dataclass(frozen=True)
class SearchResult:
    """One page of ranked recipe matches."""

    values: tuple[RecipeMatch, ...] = field(default_factory=tuple)
    total_pages: int = 0
    page_number: int = 1

    @property
    def is_empty(self) -> bool:
        """True when no recipe matched the search (a valid, non-error outcome)."""
        return not self.values

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": [match.to_dict() for match in self.values],
            "total_pages": self.total_pages,
            "page_number": self.page_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        """Create a result page from the unwrapped ``data`` payload."""
        values = data["values"]
        if not isinstance(values, list):
            raise TypeError("Search result values must be a list")
        return cls(
            values=tuple(RecipeMatch.from_dict(item) for item in values),
            total_pages=int(data["total_pages"]),
            page_number=int(data["page_number"]),
        )
