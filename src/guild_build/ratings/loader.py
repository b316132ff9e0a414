from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from guild_build.errors import RatingTableError

from .table import Logger, RatingTable


def _read_raw(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise RatingTableError(f"Invalid YAML in {path.name}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise RatingTableError(f"Invalid JSON in {path.name}: {e}") from e


def load_rating_table(
    path: Path,
    *,
    levels: Sequence[str],
    strict: bool = True,
    logger: Optional[Logger] = None,
) -> RatingTable:
    """
    job_roles.json: object like
      {"Role": {"level_1": {"Skill": 42, ...}, ...}, ...}

    YAML files with the same shape are accepted (.yaml / .yml).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rating table not found: {path}")

    data = _read_raw(path)
    if not isinstance(data, dict):
        raise RatingTableError(f"{path.name} must be an object mapping role -> levels")

    if logger:
        logger(f"loaded {path}")
    return RatingTable.from_mapping(data, levels=levels, strict=strict, logger=logger)
