"""Recipe Finder - find recipes by the ingredients you have."""

__version__ = "1.0.0"

from .api import NetworkError, RecipeAPIError, RecipeSearchAPI, RemoteError
from .highlighter import HighlightAnnotation, IngredientHighlighter, annotate, annotate_recipe
from .models import Recipe, RecipeMatch, SearchResult
from .query import QueryDescriptor, build_query
from .session import ErrorInfo, QueryCache, SearchSession, SearchSessionError, SearchView

__all__ = [
    "RecipeSearchAPI",
    "RecipeAPIError",
    "NetworkError",
    "RemoteError",
    "QueryDescriptor",
    "build_query",
    "Recipe",
    "RecipeMatch",
    "SearchResult",
    "SearchSession",
    "SearchSessionError",
    "SearchView",
    "ErrorInfo",
    "QueryCache",
    "IngredientHighlighter",
    "HighlightAnnotation",
    "annotate",
    "annotate_recipe",
]
