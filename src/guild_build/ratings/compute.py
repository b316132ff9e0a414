from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

import numpy as np

from guild_build.core.models import SkillPoint, TrendPoint
from guild_build.errors import UndefinedAggregate

from .table import RatingTable

_Q2 = Decimal("0.01")
MAX_SCORE = Decimal("100")
MIN_SCORE = Decimal("0")


def q2(x: Decimal) -> Decimal:
    return x.quantize(_Q2, rounding=ROUND_HALF_UP)


def effective_skills(table: RatingTable, skills: Iterable[str]) -> Tuple[str, ...]:
    """
    Selected skills the table knows about, lexicographically ordered.
    Names rated nowhere in the table are dropped silently.
    """
    universe = table.skill_universe
    return tuple(sorted({s for s in skills if s in universe}))


def _ratings(table: RatingTable, role: str, level: str, skills: Tuple[str, ...]) -> np.ndarray:
    # table.rating raises MissingRatingData for holes; never coerce to 0
    return np.array([table.rating(role, level, s) for s in skills], dtype=float)


def similarity_score(
    table: RatingTable,
    *,
    role_a: str,
    level_a: str,
    role_b: str,
    level_b: str,
    skills: Iterable[str],
) -> Decimal:
    """
    score = max(0, 100 - mean(|A[s] - B[s]|)) over the selected skills,
    rounded to 2 decimals (HALF_UP).
    Raises UndefinedAggregate when no known skill is selected.
    """
    ordered = effective_skills(table, skills)
    if not ordered:
        raise UndefinedAggregate("similarity")

    a = _ratings(table, role_a, level_a, ordered)
    b = _ratings(table, role_b, level_b, ordered)
    avg_diff = float(np.mean(np.abs(a - b)))

    # round the shortest decimal repr of the mean, not its binary value: 98.995 -> 99.00
    score = MAX_SCORE - Decimal(str(avg_diff))
    return q2(max(MIN_SCORE, score))


def trend_points(table: RatingTable, *, role: str, skills: Iterable[str]) -> List[TrendPoint]:
    """
    One point per configured level, in canonical level order:
      average over selected skills of rating(role, level, skill)
    """
    ordered = effective_skills(table, skills)
    if not ordered:
        raise UndefinedAggregate(f"trend for {role}")
    if not table.levels:
        return []

    # rows: levels, columns: skills
    grid = np.vstack([_ratings(table, role, level, ordered) for level in table.levels])
    means = grid.mean(axis=1)
    return [TrendPoint(level=level, average=float(avg)) for level, avg in zip(table.levels, means)]


def radar_points(table: RatingTable, *, role: str, level: str, skills: Iterable[str]) -> List[SkillPoint]:
    ordered = effective_skills(table, skills)
    ratings = _ratings(table, role, level, ordered)
    return [SkillPoint(skill=s, rating=float(r)) for s, r in zip(ordered, ratings)]
