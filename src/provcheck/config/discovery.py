"""Locate and read ``provcheck.toml``.

Lookup order: the ``PROVCHECK_CONFIG`` env var, then the nearest
``provcheck.toml`` in the start directory or any of its parents.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from provcheck.config.models import ProvcheckConfig

CONFIG_FILENAME = "provcheck.toml"
CONFIG_ENV_VAR = "PROVCHECK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file in effect for *start* (default: cwd), or None.

    An env var pointing at a missing file disables the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*; a syntax error becomes a ClickException naming the file."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ProvcheckConfig:
    """Validated file configuration, or defaults when no file exists."""
    path = path or find_config(cwd)
    if path is None:
        return ProvcheckConfig()
    return ProvcheckConfig.model_validate(read_toml(path))
