"""Tests for the config module."""

from recipe_finder.config import DEFAULT_API_BASE_URL, DEFAULT_SEARCH_TERMS, get_api_base_url


class TestGetApiBaseUrl:
    """Tests for get_api_base_url function."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RECIPE_API_BASE_URL", "https://recipes.example.com")

        assert get_api_base_url() == "https://recipes.example.com"

    def test_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("RECIPE_API_BASE_URL", "https://recipes.example.com/")

        assert get_api_base_url() == "https://recipes.example.com"

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("RECIPE_API_BASE_URL", raising=False)

        assert get_api_base_url() == DEFAULT_API_BASE_URL

    def test_default_when_empty(self, monkeypatch):
        monkeypatch.setenv("RECIPE_API_BASE_URL", "")

        assert get_api_base_url() == DEFAULT_API_BASE_URL


def test_default_search_terms():
    assert DEFAULT_SEARCH_TERMS == ["Yogurt", "Milk", "Vanilla", "Sugar"]
