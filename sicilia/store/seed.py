"""
Seed asset loading.

The seed catalog ships as a JSON array of records with
`id`, `word`, `meaning` and `isPremium` keys.
"""

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from sicilia.errors import SeedError
from sicilia.schemas import SeedRecord


_SEED_ADAPTER = TypeAdapter(list[SeedRecord])


def load_seed_records(path: str | Path) -> list[SeedRecord]:
    """
    Load and validate the seed catalog.

    Args:
        path: Path to the JSON seed asset

    Returns:
        List of validated SeedRecord objects

    Raises:
        SeedError: If the file is missing, not JSON, or a record is invalid
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SeedError(f"Cannot read seed asset {file_path}: {e}") from e

    try:
        return _SEED_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise SeedError(f"Invalid seed asset {file_path}: {e}") from e
