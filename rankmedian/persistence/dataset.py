"""JSON dataset loader.

A dataset file holds the catalog, the votes and the panel in one JSON
document::

    {"items": [...], "votes": [...], "experts": [...]}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from rankmedian.schemas.engine import Dataset


def load_dataset(path: Path | str) -> Dataset:
    """Load and validate a dataset file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Dataset {path} must be a JSON object")

    try:
        return Dataset.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid dataset {path}: {e}") from e
