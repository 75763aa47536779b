"""Recipe search API client."""

import logging
from typing import Any

import httpx

from .config import REQUEST_TIMEOUT, SEARCH_PATH, get_api_base_url
from .models import SearchResult
from .query import QueryDescriptor

logger = logging.getLogger(__name__)


class RecipeAPIError(Exception):
    """Exception raised for recipe search API errors."""

    pass


class NetworkError(RecipeAPIError):
    """The search engine could not be reached."""

    pass


class RemoteError(RecipeAPIError):
    """The search engine answered with an error or an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RecipeSearchAPI:
    """Async client for the recipe search endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.client = client or httpx.AsyncClient(
            headers={"Accept": "application/json, text/plain, */*"},
            timeout=timeout,
        )

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{SEARCH_PATH}"

    async def search(self, descriptor: QueryDescriptor) -> SearchResult:
        """
        Fetch one page of recipes matching the descriptor's ingredient terms.

        Args:
            descriptor: Canonical query (terms, page number, page size)

        Returns:
            The unwrapped result page

        Raises:
            NetworkError: If the request could not be sent or timed out
            RemoteError: If the engine returned an error status or a malformed body
        """
        url = descriptor.url(self.search_url)
        logger.debug("GET %s", url)

        try:
            response = await self.client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Recipe search returned %d for %s", e.response.status_code, url)
            raise RemoteError(
                f"Search failed: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.warning("Recipe search request failed for %s: %s", url, e)
            raise NetworkError(f"Search failed: {e}") from e
        except ValueError as e:
            logger.warning("Recipe search returned a non-JSON body for %s", url)
            raise RemoteError("Search failed: response is not valid JSON") from e

        return self._parse_result(payload)

    @staticmethod
    def _parse_result(payload: Any) -> SearchResult:
        """Unwrap the ``data`` envelope and parse the result page."""
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise RemoteError("Search failed: response has no data envelope")
        try:
            return SearchResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Search failed: malformed result ({e!r})") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "RecipeSearchAPI":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
