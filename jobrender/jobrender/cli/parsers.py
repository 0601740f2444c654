"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml


def parse_properties(value: str) -> dict[str, Any]:
    """Load manifest properties from a YAML file."""
    path = Path(value)
    if not path.is_file():
        raise typer.BadParameter(f"Properties file not found: {value}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Invalid YAML in {value}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(
            f"Properties must be a mapping, got {type(data).__name__}"
        )
    return data


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e
