"""Tests for the format_result dispatcher and OutputSettings."""

import json

from includeall.output.formatters import OutputSettings, format_result
from includeall.services.result import ServiceResult


def _paths_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="resolve_paths",
        data={"root": "Author", "max_depth": 3, "count": 2, "paths": ["books", "books.tags"]},
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_paths_result(), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["paths"] == ["books", "books.tags"]

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        output = format_result(_paths_result(), settings=settings)
        assert json.loads(output)["op"] == "resolve_paths"

    def test_quiet_mode(self) -> None:
        output = format_result(_paths_result(), settings=OutputSettings(quiet=True))
        assert output == "books\nbooks.tags"

    def test_default_is_rich(self) -> None:
        output = format_result(_paths_result())
        assert output.startswith("OK")
        assert "Author" in output
