"""TOML configuration loader.

Loads engine defaults from defaults.toml.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import ValidationError

from rankmedian.schemas.engine import EngineConfig

# Default config directory relative to the rankmedian package
_CONFIG_DIR = Path(__file__).parent / "config"


def default_config_path() -> Path:
    return _CONFIG_DIR / "defaults.toml"


def load_engine_config(config_path: Path | None = None) -> EngineConfig:
    """Load engine defaults from a TOML file.

    Args:
        config_path: Path to defaults.toml. Defaults to rankmedian/config/defaults.toml.

    Returns:
        EngineConfig with values from the ``[engine]`` table.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the TOML is malformed or a value is invalid.
    """
    path = config_path or default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    with open(path, "rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

    engine_section = raw.get("engine", {})
    if not isinstance(engine_section, dict):
        raise ValueError(f"[engine] in {path} must be a table")

    try:
        return EngineConfig(**engine_section)
    except ValidationError as e:
        raise ValueError(f"Invalid engine config in {path}: {e}") from e
