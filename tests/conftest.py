"""Shared pytest fixtures and test helpers for includeall tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from includeall.config.settings import IncludeallSettings
from includeall.domain.schema import Multiplicity, Navigation
from includeall.infrastructure.graph.engine import NetworkSchemaGraph
from includeall.infrastructure.store import Store
from includeall.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep INCLUDEALL_* env vars and telemetry state from leaking between tests."""
    monkeypatch.delenv("INCLUDEALL_CONFIG", raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> IncludeallSettings:
    return IncludeallSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def store(settings: IncludeallSettings) -> Generator[Store]:
    """Seeded SQLite store in a temp directory."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Hand-declared schema graphs
# ---------------------------------------------------------------------------


def nav(
    source: str,
    name: str,
    target: str,
    multiplicity: Multiplicity = Multiplicity.TO_MANY,
    inverse: str | None = None,
) -> Navigation:
    return Navigation(
        source=source, name=name, target=target, multiplicity=multiplicity, inverse=inverse
    )


def build_bookstore_schema() -> NetworkSchemaGraph:
    """Author/Book/Review/Tag with every back-pointer declared.

    Book.Tags is declared before Book.Reviews on purpose: the many-to-many
    edge must still come out after the regular ones.
    """
    return NetworkSchemaGraph.from_declarations(
        [
            ("Author", [nav("Author", "Books", "Book", inverse="Author")]),
            (
                "Book",
                [
                    nav("Book", "Author", "Author", Multiplicity.TO_ONE, inverse="Books"),
                    nav("Book", "Tags", "Tag", Multiplicity.MANY_TO_MANY, inverse="Books"),
                    nav("Book", "Reviews", "Review", inverse="Book"),
                ],
            ),
            ("Review", [nav("Review", "Book", "Book", Multiplicity.TO_ONE, inverse="Reviews")]),
            ("Tag", [nav("Tag", "Books", "Book", Multiplicity.MANY_TO_MANY, inverse="Tags")]),
        ]
    )


@pytest.fixture
def bookstore_schema() -> NetworkSchemaGraph:
    return build_bookstore_schema()
