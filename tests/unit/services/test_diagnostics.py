"""Tests for diagnostic payload dumps."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tubelist.services.diagnostics import dump_payload


class TestDumpPayload:
    def test_writes_file(self, tmp_path: Path) -> None:
        directory = tmp_path / "dumps" / "nested"

        path = dump_payload("<html>odd page</html>", directory)

        assert path is not None
        assert path.parent == directory
        assert path.suffix == ".txt"
        assert path.read_text(encoding="utf-8") == "<html>odd page</html>"

    def test_file_name_shape(self, tmp_path: Path) -> None:
        path = dump_payload("x", tmp_path)
        assert path is not None
        token, stamp = path.stem.split("-")
        assert len(token) == 8
        assert stamp.isdigit()

    def test_distinct_names(self, tmp_path: Path) -> None:
        first = dump_payload("a", tmp_path)
        second = dump_payload("b", tmp_path)
        assert first != second

    def test_logs_banner(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="tubelist.services.diagnostics"):
            path = dump_payload("x", tmp_path)
        assert str(path) in caplog.text

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        assert dump_payload("x", blocker / "dumps") is None
