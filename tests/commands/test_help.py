"""Tests for command help text."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from includeall.cli import cli


@pytest.mark.parametrize("command", ["paths", "schema", "load", "compare"])
def test_help_lists_examples_flag(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
