"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, includeall.toml only contains
overrides. An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from includeall.domain.includes import DEFAULT_MAX_DEPTH


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str | None = None
    echo: bool = False


class IncludesConfig(BaseModel):
    """[includes] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    strategy: Literal["selectin", "joined"] = "selectin"


class SeedConfig(BaseModel):
    """[seed] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class IncludeallConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    includes: IncludesConfig = Field(default_factory=IncludesConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
