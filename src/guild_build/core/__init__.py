from guild_build.core.models import (  # noqa: F401
    NOT_APPLICABLE,
    Average,
    ComparisonView,
    NotApplicable,
    RadarSeries,
    Score,
    SelectionState,
    SkillPoint,
    TrendPoint,
    TrendSeries,
)

__all__ = [
    "NOT_APPLICABLE",
    "Average",
    "ComparisonView",
    "NotApplicable",
    "RadarSeries",
    "Score",
    "SelectionState",
    "SkillPoint",
    "TrendPoint",
    "TrendSeries",
]
