"""
Tests for CLI main functionality.

Services are replaced on the global container with mocks, so no command
touches the network.
"""

from __future__ import annotations

import json
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from tests.factories.id_factory import TestIds
from tubelist import __version__
from tubelist.cli.main import app
from tubelist.container import container
from tubelist.exceptions import (
    ExhaustedRetriesError,
    InputError,
    TransportError,
    UpstreamAlertError,
)
from tubelist.models.enums import ItemKind
from tubelist.models.items import Author, Item
from tubelist.models.results import (
    PlaylistInfo,
    PlaylistOptions,
    SearchOptions,
    SearchResult,
)
from tubelist.services.playlist_service import PlaylistService
from tubelist.services.search_service import SearchService


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture
def playlist_service() -> Iterator[MagicMock]:
    """Mock playlist service installed on the container."""
    service = MagicMock(spec=PlaylistService)
    container.__dict__["playlist_service"] = service
    yield service
    container.reset()


@pytest.fixture
def search_service() -> Iterator[MagicMock]:
    """Mock search service installed on the container."""
    service = MagicMock(spec=SearchService)
    container.__dict__["search_service"] = service
    yield service
    container.reset()


def _video(n: int) -> Item:
    return Item(
        type=ItemKind.VIDEO,
        id=f"video{n:06d}",
        url=f"https://www.youtube.com/watch?v=video{n:06d}",
        title=f"Video [bold]{n}[/bold]",
        duration="3:33",
        views=1000 * n,
        author=Author(name="Uploader"),
    )


def _playlist_info(count: int = 2) -> PlaylistInfo:
    return PlaylistInfo(
        id=TestIds.PLAYLIST_ID,
        url=f"https://www.youtube.com/playlist?list={TestIds.PLAYLIST_ID}",
        title="My Playlist",
        total_items=42,
        views=1337,
        author=Author(name="Owner"),
        items=[_video(n) for n in range(1, count + 1)],
    )


def test_cli_version(runner):
    """Test version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"tubelist v{__version__}" in result.stdout


def test_cli_version_command(runner):
    """Test explicit version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "tubelist" in result.stdout
    assert "Version" in result.stdout


def test_cli_help(runner):
    """Test help lists the commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("playlist", "search", "resolve", "validate"):
        assert command in result.stdout


class TestPlaylistCommand:
    """Test the playlist command."""

    def test_json_output(self, runner, playlist_service):
        playlist_service.get_playlist.return_value = _playlist_info()

        result = runner.invoke(
            app, ["playlist", TestIds.PLAYLIST_ID, "--limit", "5", "-f", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["id"] == TestIds.PLAYLIST_ID
        assert data["title"] == "My Playlist"
        assert [item["id"] for item in data["items"]] == ["video000001", "video000002"]
        assert data["items"][0]["title"] == "Video [bold]1[/bold]"

        playlist_service.get_playlist.assert_awaited_once_with(
            TestIds.PLAYLIST_ID, PlaylistOptions(limit=5)
        )

    def test_table_output(self, runner, playlist_service):
        playlist_service.get_playlist.return_value = _playlist_info()

        result = runner.invoke(app, ["playlist", TestIds.PLAYLIST_ID])

        assert result.exit_code == 0
        assert "My Playlist" in result.stdout
        assert "Owner" in result.stdout
        assert "Videos: 42" in result.stdout

    def test_locale_and_retries(self, runner, playlist_service):
        playlist_service.get_playlist.return_value = _playlist_info(0)

        result = runner.invoke(
            app,
            ["playlist", TestIds.PLAYLIST_ID, "--gl", "DE", "--hl", "de", "--retries", "5"],
        )

        assert result.exit_code == 0
        playlist_service.get_playlist.assert_awaited_once_with(
            TestIds.PLAYLIST_ID, PlaylistOptions(gl="DE", hl="de", retries=5)
        )

    def test_input_error(self, runner, playlist_service):
        playlist_service.get_playlist.side_effect = InputError(
            "mixes not supported", value=TestIds.MIX_ID
        )

        result = runner.invoke(app, ["playlist", TestIds.MIX_ID])

        assert result.exit_code == 1
        assert "mixes not supported" in result.output

    def test_alert_error(self, runner, playlist_service):
        playlist_service.get_playlist.side_effect = UpstreamAlertError(
            "The playlist does not exist."
        )

        result = runner.invoke(app, ["playlist", TestIds.PLAYLIST_ID])

        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_exhausted_retries(self, runner, playlist_service, tmp_path):
        playlist_service.get_playlist.side_effect = ExhaustedRetriesError(
            "unsupported playlist", attempts=3, dump_path=tmp_path / "dump.txt"
        )

        result = runner.invoke(app, ["playlist", TestIds.PLAYLIST_ID])

        assert result.exit_code == 2
        assert "unsupported playlist" in result.output

    def test_partial_result_rendered(self, runner, playlist_service):
        error = TransportError("HTTP 500 from browse", status_code=500)
        error.partial_result = _playlist_info(3)
        playlist_service.get_playlist.side_effect = error

        result = runner.invoke(app, ["playlist", TestIds.PLAYLIST_ID, "-f", "json"])

        assert result.exit_code == 2
        assert "HTTP 500" in result.output
        assert "partial" in result.output
        assert "video000003" in result.output

    def test_transport_error_without_partial(self, runner, playlist_service):
        playlist_service.get_playlist.side_effect = TransportError(
            "GET failed: ConnectError"
        )

        result = runner.invoke(app, ["playlist", TestIds.PLAYLIST_ID])

        assert result.exit_code == 2
        assert "ConnectError" in result.output


class TestSearchCommand:
    """Test the search command."""

    def test_json_output(self, runner, search_service):
        search_service.search.return_value = SearchResult(
            query="lofi", results=5000, items=[_video(1)], continuation="next"
        )

        result = runner.invoke(app, ["search", "lofi", "--limit", "1", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["query"] == "lofi"
        assert data["results"] == 5000
        assert data["continuation"] == "next"
        assert data["items"][0]["type"] == "video"

    def test_options_passed(self, runner, search_service):
        search_service.search.return_value = SearchResult(
            query="mix", type=ItemKind.PLAYLIST
        )

        result = runner.invoke(
            app,
            ["search", "mix", "-t", "playlist", "--safe-search", "--gl", "GB"],
        )

        assert result.exit_code == 0
        search_service.search.assert_awaited_once_with(
            "mix",
            SearchOptions(type=ItemKind.PLAYLIST, safe_search=True, gl="GB"),
        )

    def test_invalid_type(self, runner, search_service):
        result = runner.invoke(app, ["search", "lofi", "--type", "channel"])

        assert result.exit_code == 2
        search_service.search.assert_not_called()

    def test_empty_query(self, runner, search_service):
        search_service.search.side_effect = InputError("search string is mandatory")

        result = runner.invoke(app, ["search", ""])

        assert result.exit_code == 1
        assert "search string is mandatory" in result.output


class TestResolveAndValidate:
    """Test the resolve and validate commands."""

    def test_resolve(self, runner, playlist_service):
        playlist_service.get_playlist_id.return_value = TestIds.UPLOADS_ID

        result = runner.invoke(app, ["resolve", TestIds.CHANNEL_ID])

        assert result.exit_code == 0
        assert result.stdout.strip() == TestIds.UPLOADS_ID

    def test_resolve_error(self, runner, playlist_service):
        playlist_service.get_playlist_id.side_effect = InputError(
            "not a known youtube link", value="https://example.com"
        )

        result = runner.invoke(app, ["resolve", "https://example.com"])

        assert result.exit_code == 1
        assert "not a known youtube link" in result.output

    @pytest.mark.parametrize(
        "link_or_id,exit_code,text",
        [
            (TestIds.PLAYLIST_ID, 0, "valid"),
            (f"https://www.youtube.com/channel/{TestIds.CHANNEL_ID}", 0, "valid"),
            (TestIds.MIX_ID, 1, "invalid"),
            ("https://example.com/playlist?list=PL", 1, "invalid"),
        ],
    )
    def test_validate(self, runner, link_or_id, exit_code, text):
        try:
            result = runner.invoke(app, ["validate", link_or_id])
        finally:
            container.reset()

        assert result.exit_code == exit_code
        assert result.stdout.strip() == text
