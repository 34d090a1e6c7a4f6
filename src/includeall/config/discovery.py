"""Config file discovery and loading.

Walk-up finder locates includeall.toml, similar to how git finds .git/.
Supports the INCLUDEALL_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from includeall.config.models import IncludeallConfig

CONFIG_FILENAME = "includeall.toml"
CONFIG_ENV_VAR = "INCLUDEALL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for includeall.toml.

    Returns the path to the config file, or None if not found.
    Checks INCLUDEALL_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def load_config(path: Path | None = None, cwd: Path | None = None) -> IncludeallConfig:
    """Load and validate config from a TOML file (defaults if none found)."""
    if path is None:
        path = find_config(cwd)
    if path is None:
        return IncludeallConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return IncludeallConfig.model_validate(data)
