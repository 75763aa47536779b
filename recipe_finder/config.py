"""Configuration for Recipe Finder."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

APP_NAME = "recipe-finder"

# API Configuration
DEFAULT_API_BASE_URL = "http://localhost:8080"
SEARCH_PATH = "/api/recipes/search"
PAGE_SIZE = 10
REQUEST_TIMEOUT = 10.0

# Completed search results are reused for this long before being fetched again
CACHE_TTL_SECONDS = 300.0

# Terms the interactive search starts with
DEFAULT_SEARCH_TERMS = ["Yogurt", "Milk", "Vanilla", "Sugar"]


def get_api_base_url() -> str:
    """Get the recipe API base URL from the environment, without trailing slash."""
    url = os.getenv("RECIPE_API_BASE_URL") or DEFAULT_API_BASE_URL
    return url.rstrip("/")
