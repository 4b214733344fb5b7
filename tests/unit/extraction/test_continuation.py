"""Tests for the continuation token locator."""

from __future__ import annotations

from tests.factories.renderer_factory import (
    make_continuation_item,
    make_playlist_video_renderer,
    wrap,
)
from tubelist.extraction.continuation import find_continuation_token, token_from_items


class TestFindContinuationToken:
    """Test token lookup across the known shapes."""

    def test_endpoint_shape(self) -> None:
        assert find_continuation_token(make_continuation_item("abc")) == "abc"

    def test_button_shape(self) -> None:
        entry = {
            "continuationItemRenderer": {
                "button": {
                    "buttonRenderer": {
                        "text": {"runs": [{"text": "Show more"}]},
                        "command": {"continuationCommand": {"token": "btn"}},
                    }
                }
            }
        }
        assert find_continuation_token(entry) == "btn"

    def test_bare_renderer(self) -> None:
        renderer = {"continuationEndpoint": {"continuationCommand": {"token": "bare"}}}
        assert find_continuation_token(renderer) == "bare"

    def test_known_shape_wins_over_scan(self) -> None:
        entry = {
            "continuationItemRenderer": {
                "extra": {"continuationCommand": {"token": "deep"}},
                "continuationEndpoint": {"continuationCommand": {"token": "known"}},
            }
        }
        assert find_continuation_token(entry) == "known"

    def test_depth_first_fallback(self) -> None:
        entry = {
            "continuationItemRenderer": {
                "wrapper": [
                    {"nothing": 1},
                    {"inner": {"continuationCommand": {"token": "scanned"}}},
                ]
            }
        }
        assert find_continuation_token(entry) == "scanned"

    def test_no_token(self) -> None:
        assert find_continuation_token({"continuationItemRenderer": {}}) == ""
        assert find_continuation_token(None) == ""
        assert find_continuation_token("token") == ""

    def test_non_string_token_ignored(self) -> None:
        entry = {
            "continuationItemRenderer": {
                "continuationEndpoint": {"continuationCommand": {"token": 42}}
            }
        }
        assert find_continuation_token(entry) == ""


class TestTokenFromItems:
    """Test next-page token lookup over a raw entry list."""

    def test_token_after_items(self) -> None:
        raw = [
            wrap("playlistVideoRenderer", make_playlist_video_renderer()),
            wrap("playlistVideoRenderer", make_playlist_video_renderer()),
            make_continuation_item("next-page"),
        ]
        assert token_from_items(raw) == "next-page"

    def test_last_page(self) -> None:
        raw = [wrap("playlistVideoRenderer", make_playlist_video_renderer())]
        assert token_from_items(raw) == ""

    def test_skips_markers_without_token(self) -> None:
        raw = [{"continuationItemRenderer": {}}, make_continuation_item("second")]
        assert token_from_items(raw) == "second"

    def test_only_marker_entries_consulted(self) -> None:
        """A token nested in an ordinary item is not a next-page token."""
        video = make_playlist_video_renderer(
            menu={"continuationCommand": {"token": "not-a-page"}}
        )
        assert token_from_items([wrap("playlistVideoRenderer", video)]) == ""

    def test_non_list(self) -> None:
        assert token_from_items(None) == ""
        assert token_from_items(make_continuation_item("x")) == ""
