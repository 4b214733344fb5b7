"""
Tests for CLI error formatting and exit code mapping.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tubelist.cli.constants import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR
from tubelist.cli.errors import (
    ErrorCategory,
    category_for_error,
    display_tubelist_error,
    format_error,
    get_exit_code_for_category,
    hint_for_error,
)
from tubelist.exceptions import (
    ExhaustedRetriesError,
    InputError,
    TransportError,
    TubelistError,
    UpstreamAlertError,
    UpstreamShapeError,
)


class TestFormatError:
    def test_message_only(self):
        assert format_error("Input", "mixes not supported") == (
            "Error: Input: mixes not supported"
        )

    def test_all_parts(self):
        formatted = format_error(
            "Input",
            "not a known youtube link",
            expected="a playlist ID or a youtube.com URL",
            got="https://example.com/x",
            hint="Copy the link from the address bar",
        )
        assert formatted.splitlines() == [
            "Error: Input: not a known youtube link",
            "   Expected: a playlist ID or a youtube.com URL",
            "   Got: https://example.com/x",
            "   Hint: Copy the link from the address bar",
        ]


class TestCategories:
    @pytest.mark.parametrize(
        "error,category",
        [
            (InputError("bad"), ErrorCategory.INPUT),
            (UpstreamAlertError("gone"), ErrorCategory.UPSTREAM),
            (UpstreamShapeError("shape"), ErrorCategory.UPSTREAM),
            (TransportError("net"), ErrorCategory.NETWORK),
            (ExhaustedRetriesError("json"), ErrorCategory.RETRIES),
            (TubelistError("other"), ErrorCategory.UPSTREAM),
        ],
    )
    def test_category_for_error(self, error, category):
        assert category_for_error(error) == category

    @pytest.mark.parametrize(
        "category,code",
        [
            (ErrorCategory.INPUT, EXIT_USER_ERROR),
            (ErrorCategory.UPSTREAM, EXIT_SYSTEM_ERROR),
            (ErrorCategory.NETWORK, EXIT_SYSTEM_ERROR),
            (ErrorCategory.RETRIES, EXIT_SYSTEM_ERROR),
            ("Unknown", EXIT_SYSTEM_ERROR),
        ],
    )
    def test_exit_codes(self, category, code):
        assert get_exit_code_for_category(category) == code


class TestHints:
    def test_dump_path_hint(self, tmp_path: Path):
        error = ExhaustedRetriesError("unable to find JSON", dump_path=tmp_path / "d.txt")
        hint = hint_for_error(error)
        assert hint is not None
        assert str(tmp_path / "d.txt") in hint

    def test_rate_limit_hint(self):
        assert "rate limiting" in hint_for_error(TransportError("HTTP 429", status_code=429))

    def test_no_hint(self):
        assert hint_for_error(ExhaustedRetriesError("unable to find JSON")) is None
        assert hint_for_error(TransportError("HTTP 500", status_code=500)) is None
        assert hint_for_error(InputError("bad")) is None


class TestDisplay:
    def test_returns_exit_code(self, capsys):
        assert display_tubelist_error(InputError("bad input", value="x")) == 1
        assert display_tubelist_error(TransportError("down")) == 2

        captured = capsys.readouterr()
        assert "bad input" in captured.err
        assert "down" in captured.err

    def test_markup_in_message_escaped(self, capsys):
        display_tubelist_error(UpstreamAlertError("[bold]not markup[/bold]"))
        assert "[bold]not markup[/bold]" in capsys.readouterr().err
