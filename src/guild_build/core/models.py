from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class NotApplicable(Enum):
    """Sentinel for values that are undefined for the current selection."""

    NOT_APPLICABLE = "N/A"

    def __str__(self) -> str:
        return self.value


NOT_APPLICABLE = NotApplicable.NOT_APPLICABLE

Score = Union[Decimal, NotApplicable]
Average = Union[float, NotApplicable]


@dataclass(frozen=True)
class SelectionState:
    """Current picks of the presentation layer. Replaced, never mutated."""

    role_a: str
    level_a: str
    level_b: str
    selected_skills: FrozenSet[str]
    role_b: Optional[str] = None

    @property
    def comparing(self) -> bool:
        return self.role_b is not None

    @property
    def ordered_skills(self) -> Tuple[str, ...]:
        return tuple(sorted(self.selected_skills))


@dataclass(frozen=True)
class SkillPoint:
    skill: str
    rating: float


@dataclass(frozen=True)
class RadarSeries:
    """One polygon on the radar chart: a (role, level) profile over the selection."""

    label: str
    role: str
    level: str
    points: Tuple[SkillPoint, ...]


@dataclass(frozen=True)
class TrendPoint:
    level: str
    average: Average      # NOT_APPLICABLE when no skills are selected


@dataclass(frozen=True)
class TrendSeries:
    """One line on the trend chart: a role's average rating at each level."""

    label: str
    role: str
    points: Tuple[TrendPoint, ...]


@dataclass(frozen=True)
class ComparisonView:
    """Everything the charts need, derived from table + selection."""

    similarity: Score
    radar: Tuple[RadarSeries, ...]
    trend: Tuple[TrendSeries, ...]
