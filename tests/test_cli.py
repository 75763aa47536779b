"""Tests for CLI commands."""

from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from conftest import API_BASE_URL, SEARCH_URL, make_page
from recipe_finder.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestSearchCommand:
    """Tests for the search command."""

    def test_prints_results(self, runner, mock_httpx, dessert_page):
        mock_httpx.get(url__startswith=SEARCH_URL).respond(json={"data": dessert_page})

        result = runner.invoke(
            cli, ["search", "Yogurt", "Milk", "Vanilla", "Sugar", "--api-url", API_BASE_URL]
        )

        assert result.exit_code == 0
        assert "Page 1 of 3" in result.output
        assert "Vanilla Yogurt Parfait" in result.output
        assert "- 1 cup Greek yogurt" in result.output
        assert "missing 1 ingredient" in result.output
        assert "missing 2 ingredients" in result.output

    def test_requests_page(self, runner, mock_httpx, dessert_page):
        def respond(request):
            page = int(request.url.params["page_number"])
            return httpx.Response(200, json={"data": {**dessert_page, "page_number": page}})

        route = mock_httpx.get(url__startswith=SEARCH_URL).mock(side_effect=respond)

        result = runner.invoke(cli, ["search", "Milk", "--page", "2", "--api-url", API_BASE_URL])

        assert result.exit_code == 0
        assert "Page 2 of 3" in result.output
        assert route.calls.last.request.url.params["page_number"] == "2"

    def test_page_past_last_page(self, runner, mock_httpx, dessert_page):
        mock_httpx.get(url__startswith=SEARCH_URL).respond(json={"data": dessert_page})

        result = runner.invoke(cli, ["search", "Milk", "--page", "7", "--api-url", API_BASE_URL])

        assert result.exit_code == 1
        assert "past the last page" in result.output

    def test_no_results(self, runner, mock_httpx):
        mock_httpx.get(url__startswith=SEARCH_URL).respond(
            json={"data": make_page([], total_pages=1)}
        )

        result = runner.invoke(cli, ["search", "Durian", "--api-url", API_BASE_URL])

        assert result.exit_code == 0
        assert "No recipes found for the ingredients" in result.output

    def test_remote_error(self, runner, mock_httpx):
        mock_httpx.get(url__startswith=SEARCH_URL).respond(status_code=503)

        result = runner.invoke(cli, ["search", "Milk", "--api-url", API_BASE_URL])

        assert result.exit_code == 1
        assert "Error: Search failed: 503" in result.output

    def test_network_error(self, runner, mock_httpx):
        mock_httpx.get(url__startswith=SEARCH_URL).mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        result = runner.invoke(cli, ["search", "Milk", "--api-url", API_BASE_URL])

        assert result.exit_code == 1
        assert "Connection refused" in result.output

    def test_requires_terms(self, runner):
        result = runner.invoke(cli, ["search"])

        assert result.exit_code != 0

    def test_api_url_from_environment(self, runner, mock_httpx, monkeypatch):
        monkeypatch.setenv("RECIPE_API_BASE_URL", API_BASE_URL)
        route = mock_httpx.get(url__startswith=SEARCH_URL).respond(json={"data": make_page([])})

        result = runner.invoke(cli, ["search", "Milk"])

        assert result.exit_code == 0
        assert route.called


class TestBrowseCommand:
    """Tests for the browse command."""

    def test_launches_app_with_terms(self, runner):
        with patch("recipe_finder.tui.run_app") as run_app:
            result = runner.invoke(cli, ["browse", "Egg", "Flour", "--api-url", API_BASE_URL])

        assert result.exit_code == 0
        api, terms = run_app.call_args.args
        assert api.base_url == API_BASE_URL
        assert terms == ["Egg", "Flour"]

    def test_default_terms(self, runner):
        with patch("recipe_finder.tui.run_app") as run_app:
            result = runner.invoke(cli, ["browse", "--api-url", API_BASE_URL])

        assert result.exit_code == 0
        assert run_app.call_args.args[1] is None


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "1.0.0" in result.output
