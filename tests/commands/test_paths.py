"""Tests for the paths command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from includeall.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestPathsCommand:
    def test_author(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["paths", "Author"])
        assert result.exit_code == 0, result.output
        assert "3 path(s), max depth 3" in result.output
        assert "reviews" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "paths", "Author"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["paths"] == ["books", "books.reviews", "books.tags"]

    def test_quiet_one_path_per_line(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "paths", "Review"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["book", "book.author", "book.tags"]

    def test_depth_exceeded_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "paths", "Author", "--max-depth", "1"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "DEPTH_EXCEEDED"
        assert payload["error"]["detail"]["path"] == "books.reviews"

    def test_unknown_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["paths", "Publisher"])
        assert result.exit_code == 1
        assert "not part of the schema" in result.stderr
        assert "Author, Book, Review, Tag" in result.stderr

    def test_zero_depth_rejected_by_cli(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["paths", "Author", "--max-depth", "0"])
        assert result.exit_code == 2

    def test_config_max_depth(self, cli_runner: CliRunner) -> None:
        with open("includeall.toml", "w", encoding="utf-8") as fh:
            fh.write("[includes]\nmax_depth = 1\n")
        result = cli_runner.invoke(cli, ["paths", "Book"])
        assert result.exit_code == 0
        assert "max depth 1" in result.output

    def test_verbose_shows_spans(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "paths", "Author"])
        assert result.exit_code == 0
        assert "IncludeService.resolve_paths" in result.output
        assert "resolve_include_paths" in result.output
