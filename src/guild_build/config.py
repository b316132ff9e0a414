from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from guild_build.levels import (
    DEFAULT_LEVEL_SCHEME,
    LevelScheme,
    custom_level_scheme,
    get_level_scheme,
)


DEFAULT_DATA_DIR = Path("data")
DEFAULT_RATINGS_PATH = DEFAULT_DATA_DIR / "job_roles.json"
DEFAULT_LEVEL_SCHEME_NAME = DEFAULT_LEVEL_SCHEME.name


def _load_pyproject_config(project_root: Path) -> Dict[str, Any]:
    pyproject_path = project_root / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("guild_build", {}) or {}


def _ensure_mapping(obj: Any, ctx: str) -> Dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"{ctx} must be a mapping/object")
    return obj


def _load_override_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config override not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return _ensure_mapping(json.loads(path.read_text(encoding="utf-8")), "JSON config")
    if suffix in {".yaml", ".yml"}:
        return _ensure_mapping(yaml.safe_load(path.read_text(encoding="utf-8")), "YAML config")
    if suffix == ".toml":
        with path.open("rb") as f:
            return _ensure_mapping(tomllib.load(f), "TOML config")

    raise ValueError(f"Unsupported config override format: {path}")


def _merge_section(base: Mapping[str, Any], override: Mapping[str, Any], key: str) -> Dict[str, Any]:
    merged = dict(_ensure_mapping(base.get(key), f"{key} section"))
    merged.update(_ensure_mapping(override.get(key), f"{key} section"))
    return merged


def _merge_top(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    merged.update(override)
    merged.pop("paths", None)
    return merged


def _resolve_path(project_root: Path, candidate: Optional[object], default: Path) -> Path:
    from guild_build.resources import is_frozen, resource_path

    path = default if candidate is None else Path(str(candidate))

    if path.is_absolute():
        return path

    if is_frozen():
        return resource_path(path.as_posix())
    return (project_root / path).resolve()


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    ratings_path: Path = DEFAULT_RATINGS_PATH
    level_scheme: str = DEFAULT_LEVEL_SCHEME_NAME
    levels: Optional[Tuple[str, ...]] = None   # explicit list wins over level_scheme
    strict_table: bool = True

    @property
    def scheme(self) -> LevelScheme:
        if self.levels is not None:
            return custom_level_scheme(self.levels)
        return get_level_scheme(self.level_scheme)

    @property
    def levels_enum(self) -> Tuple[str, ...]:
        return tuple(self.scheme.levels)

    def validate(self, *, strict: bool = True, require_paths: bool = True) -> Dict[str, str]:
        issues: Dict[str, str] = {}

        try:
            _ = self.scheme
        except ValueError as e:
            issues["levels" if self.levels is not None else "level_scheme"] = str(e)

        if require_paths and not Path(self.ratings_path).exists():
            issues["ratings_path"] = f"path does not exist: {self.ratings_path}"

        if not isinstance(self.strict_table, bool):
            issues["strict_table"] = "strict_table must be a bool"

        if strict and issues:
            details = "\n- ".join(f"{k}: {v}" for k, v in issues.items())
            raise ValueError("Config validation failed:\n- " + details)
        return issues

    @classmethod
    def _from_maps(
        cls,
        *,
        project_root: Path,
        top: Mapping[str, Any],
        paths: Mapping[str, Any],
    ) -> "AppConfig":
        data_dir = _resolve_path(project_root, paths.get("data_dir") or top.get("data_dir"), DEFAULT_DATA_DIR)

        ratings_default = data_dir / DEFAULT_RATINGS_PATH.name
        ratings = paths.get("ratings") or top.get("ratings_path") or top.get("ratings")

        levels = top.get("levels")
        if levels is not None and not isinstance(levels, (list, tuple)):
            raise ValueError("levels must be a list of level names")

        strict_table = top.get("strict_table")

        return cls(
            data_dir=data_dir,
            ratings_path=_resolve_path(project_root, ratings, ratings_default),
            level_scheme=str(top.get("level_scheme", DEFAULT_LEVEL_SCHEME_NAME)).upper(),
            levels=tuple(str(level) for level in levels) if levels is not None else None,
            strict_table=bool(True if strict_table is None else strict_table),
        )


def load_app_config(*, project_root: Optional[Path] = None, override_path: Optional[Path] = None) -> AppConfig:
    root = Path(project_root) if project_root else Path.cwd()

    base = _load_pyproject_config(root)
    override = _load_override_file(override_path) if override_path else {}

    top = _merge_top(base, override)
    paths = _merge_section(base, override, "paths")

    return AppConfig._from_maps(project_root=root, top=top, paths=paths)

