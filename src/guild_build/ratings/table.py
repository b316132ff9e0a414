from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from guild_build.errors import InvalidSelection, MissingRatingData, RatingTableError

# Types: { "Role": { "level_1": { "Skill": 42, ... }, ... }, ... }
SkillRatings = Mapping[str, float]

Logger = Callable[[str], None]


def _skill_diff(expected: FrozenSet[str], actual: FrozenSet[str]) -> str:
    missing = sorted(expected - actual)
    extra = sorted(actual - expected)
    parts = []
    if missing:
        parts.append(f"missing {missing}")
    if extra:
        parts.append(f"extra {extra}")
    return ", ".join(parts)


def validate_rating_table(*, data: Mapping[str, Mapping[str, Mapping[str, Any]]], levels: Sequence[str]) -> List[str]:
    """
    Returns issues (strings). Does not raise.
    Checks:
      - at least one role
      - every role defines exactly the configured levels
      - within a role, every level rates the same skills
      - every role rates the same skills as the first role
    """
    issues: List[str] = []
    if not data:
        return ["rating table has no roles"]

    wanted_levels = set(levels)
    reference_role: Optional[str] = None
    reference_skills: FrozenSet[str] = frozenset()

    for role, role_levels in data.items():
        present = set(role_levels)
        missing_levels = [lvl for lvl in levels if lvl not in present]
        if missing_levels:
            issues.append(f"{role}: missing levels {missing_levels}")
        extra_levels = sorted(present - wanted_levels)
        if extra_levels:
            issues.append(f"{role}: unexpected levels {extra_levels}")

        role_skills: Optional[FrozenSet[str]] = None
        first_level = None
        for level in levels:
            if level not in role_levels:
                continue
            skills = frozenset(role_levels[level])
            if role_skills is None:
                role_skills, first_level = skills, level
                continue
            if skills != role_skills:
                issues.append(f"{role}/{level}: skills differ from {first_level}: {_skill_diff(role_skills, skills)}")

        if role_skills is None:
            continue
        if reference_role is None:
            reference_role, reference_skills = role, role_skills
        elif role_skills != reference_skills:
            issues.append(f"{role}: skills differ from {reference_role}: {_skill_diff(reference_skills, role_skills)}")

    return issues


def _freeze(data: Mapping[str, Any], levels: Sequence[str]) -> Dict[str, Mapping[str, SkillRatings]]:
    if not isinstance(data, Mapping):
        raise RatingTableError("rating table must be a mapping role -> levels")

    out: Dict[str, Mapping[str, SkillRatings]] = {}
    for role, role_levels in data.items():
        if not isinstance(role, str) or not role.strip():
            raise RatingTableError(f"Invalid role name: {role!r}")
        if not isinstance(role_levels, Mapping):
            raise RatingTableError(f"Invalid levels for role {role!r}: expected a mapping")

        # configured levels first (canonical order), anything else after, as found
        ordered = [lvl for lvl in levels if lvl in role_levels]
        ordered += [lvl for lvl in role_levels if lvl not in ordered]

        frozen_levels: Dict[str, SkillRatings] = {}
        for level in ordered:
            skills = role_levels[level]
            if not isinstance(level, str):
                raise RatingTableError(f"Invalid level name for role {role!r}: {level!r}")
            if not isinstance(skills, Mapping):
                raise RatingTableError(f"Invalid skills for {role!r}/{level!r}: expected a mapping")
            ratings: Dict[str, float] = {}
            for skill, rating in skills.items():
                if not isinstance(skill, str) or not skill.strip():
                    raise RatingTableError(f"Invalid skill name for {role!r}/{level!r}: {skill!r}")
                # bool is a Real subclass; reject it explicitly
                if isinstance(rating, bool) or not isinstance(rating, (Real, Decimal)):
                    raise RatingTableError(f"Invalid rating for {role!r}/{level!r}/{skill!r}: {rating!r}")
                if not math.isfinite(float(rating)):
                    raise RatingTableError(f"Non-finite rating for {role!r}/{level!r}/{skill!r}: {rating!r}")
                ratings[skill] = float(rating)
            frozen_levels[level] = MappingProxyType(ratings)
        out[role] = MappingProxyType(frozen_levels)
    return out


class RatingTable:
    """
    Read-only role -> level -> skill -> rating table.

    Built once (see `from_mapping` / `ratings.loader.load_rating_table`) and
    shared by every model reading it. Role order is the source order; level
    order is the configured enumeration.
    """

    def __init__(
        self,
        data: Mapping[str, Mapping[str, SkillRatings]],
        *,
        levels: Sequence[str],
        issues: Sequence[str] = (),
    ) -> None:
        self._data: Mapping[str, Mapping[str, SkillRatings]] = MappingProxyType(dict(data))
        self._levels: Tuple[str, ...] = tuple(levels)
        self._roles: Tuple[str, ...] = tuple(self._data)
        self._issues: Tuple[str, ...] = tuple(issues)
        self._universe: FrozenSet[str] = frozenset(
            skill
            for role_levels in self._data.values()
            for ratings in role_levels.values()
            for skill in ratings
        )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        levels: Sequence[str],
        strict: bool = True,
        logger: Optional[Logger] = None,
    ) -> "RatingTable":
        """
        Validate and freeze a nested mapping.

        strict=True  -> any structural issue raises RatingTableError
        strict=False -> issues are kept on `table.issues` and logged; the
                        affected cells raise MissingRatingData when read
        """
        frozen = _freeze(data, levels)
        issues = validate_rating_table(data=frozen, levels=levels)
        if issues and strict:
            raise RatingTableError("Rating table validation failed", issues=issues)
        if logger:
            for issue in issues:
                logger(f"rating table: {issue}")
            logger(f"rating table: {len(frozen)} roles x {len(levels)} levels")
        return cls(frozen, levels=levels, issues=issues)

    # ---- accessors ----

    @property
    def roles(self) -> Tuple[str, ...]:
        return self._roles

    @property
    def levels(self) -> Tuple[str, ...]:
        return self._levels

    @property
    def issues(self) -> Tuple[str, ...]:
        return self._issues

    @property
    def skill_universe(self) -> FrozenSet[str]:
        """Every skill name rated anywhere in the table."""
        return self._universe

    def as_dict(self) -> Dict[str, Dict[str, Dict[str, float]]]:
        return {
            role: {level: dict(ratings) for level, ratings in role_levels.items()}
            for role, role_levels in self._data.items()
        }

    def has_role(self, role: object) -> bool:
        return isinstance(role, str) and role in self._data

    def has_level(self, level: object) -> bool:
        return isinstance(level, str) and level in self._levels

    def require_role(self, role: object, *, field: str = "role") -> str:
        if not self.has_role(role):
            raise InvalidSelection(field, role, self._roles)
        return role  # type: ignore[return-value]

    def require_level(self, level: object, *, field: str = "level") -> str:
        if not self.has_level(level):
            raise InvalidSelection(field, level, self._levels)
        return level  # type: ignore[return-value]

    def ratings_for(self, role: str, level: str) -> SkillRatings:
        self.require_role(role)
        self.require_level(level)
        role_levels = self._data[role]
        if level not in role_levels:
            return MappingProxyType({})
        return role_levels[level]

    def skills_for(self, role: str, level: str) -> Tuple[str, ...]:
        """Skill names rated at (role, level), lexicographically ordered."""
        return tuple(sorted(self.ratings_for(role, level)))

    def rating(self, role: str, level: str, skill: str) -> float:
        ratings = self.ratings_for(role, level)
        try:
            return ratings[skill]
        except KeyError:
            raise MissingRatingData(role, level, skill) from None

    def __contains__(self, role: object) -> bool:
        return self.has_role(role)

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"RatingTable(roles={len(self._roles)}, levels={list(self._levels)})"
