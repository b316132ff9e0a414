from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from guild_build.config import AppConfig, load_app_config
from guild_build.core import ComparisonView
from guild_build.levels import detect_level_scheme
from guild_build.ratings import RatingTable, load_rating_table
from guild_build.view_model import SkillComparisonModel

Logger = Callable[[str], None]


def _app_config(app_config: Optional[AppConfig], config_path: Optional[Path]) -> AppConfig:
    cfg = app_config or load_app_config(override_path=Path(config_path) if config_path else None)
    cfg.validate()
    return cfg


def load_table(
    *,
    app_config: Optional[AppConfig] = None,
    config_path: Optional[Path] = None,
    strict: Optional[bool] = None,
    logger: Optional[Logger] = None,
) -> RatingTable:
    cfg = _app_config(app_config, config_path)
    return load_rating_table(
        cfg.ratings_path,
        levels=cfg.levels_enum,
        strict=cfg.strict_table if strict is None else strict,
        logger=logger,
    )


def load_model(
    *,
    app_config: Optional[AppConfig] = None,
    config_path: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> SkillComparisonModel:
    table = load_table(app_config=app_config, config_path=config_path, logger=logger)
    return SkillComparisonModel(table)


def check_table(
    *,
    app_config: Optional[AppConfig] = None,
    config_path: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> List[str]:
    """
    Load the table non-strictly and return every structural issue found.
    When the file is keyed by another shipped level scheme, a hint naming
    that scheme is appended.
    """
    cfg = _app_config(app_config, config_path)
    table = load_table(app_config=cfg, strict=False, logger=logger)
    issues = list(table.issues)

    if issues and table.roles:
        first = table.as_dict()[table.roles[0]]
        detected = detect_level_scheme(first)
        if detected is not None and tuple(detected.levels) != cfg.levels_enum:
            issues.append(f"levels look like the {detected.name} scheme; set level_scheme = \"{detected.name}\"")
    return issues


def compare(
    *,
    role_a: Optional[str] = None,
    level_a: Optional[str] = None,
    role_b: Optional[str] = None,
    level_b: Optional[str] = None,
    skills: Optional[Iterable[str]] = None,
    model: Optional[SkillComparisonModel] = None,
    app_config: Optional[AppConfig] = None,
    config_path: Optional[Path] = None,
    logger: Optional[Logger] = None,
) -> ComparisonView:
    """
    Apply a selection on top of the model defaults and return the view.

    Omitted arguments keep the defaults (first role, first level, all
    skills of role A's level). Unknown roles/levels raise InvalidSelection.
    """
    m = model or load_model(app_config=app_config, config_path=config_path, logger=logger)

    if role_a is not None:
        m.set_role_a(role_a)
    if level_a is not None:
        m.set_level_a(level_a)
    m.set_role_b(role_b)
    if level_b is not None:
        m.set_level_b(level_b)

    if skills is None:
        m.select_all()
    else:
        m.set_selected_skills(skills)

    if logger:
        sel = m.selection
        logger(f"comparing {sel.role_a} ({sel.level_a}) vs {sel.role_b or '-'} ({sel.level_b}) over {len(sel.selected_skills)} skills")
    return m.view()
