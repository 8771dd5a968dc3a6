"""File parsing utilities for reading setup files."""

import json
from pathlib import Path
from typing import Any

from tote_inventory.exceptions import InvalidOperationException


def parse_json_records(file_path: Path) -> list[dict[str, Any]]:
    """Parse a JSON file holding a list of objects.

    Raises:
        InvalidOperationException: If the file is missing, unreadable or not a list of objects
    """
    if not file_path.exists():
        raise InvalidOperationException("parse setup file", f"file not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as file:
            data = json.load(file)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidOperationException("parse setup file", f"error reading {file_path}: {str(e)}") from e

    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise InvalidOperationException("parse setup file", f"{file_path} must contain a list of objects")

    return data


def get_setup_container_types_file_path() -> Path:
    """Path to tote_inventory/data/setup/container_types.json."""
    package_dir = Path(__file__).parent.parent
    return package_dir / "data" / "setup" / "container_types.json"


def get_container_types_from_setup() -> list[dict[str, Any]]:
    """Built-in container type catalog entries."""
    return parse_json_records(get_setup_container_types_file_path())
