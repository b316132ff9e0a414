from guild_build.core import NOT_APPLICABLE, ComparisonView, SelectionState
from guild_build.errors import (
    ComparisonError,
    InvalidSelection,
    MissingRatingData,
    RatingTableError,
    UndefinedAggregate,
)
from guild_build.ratings import RatingTable, load_rating_table
from guild_build.view_model import SkillComparisonModel

__version__ = "0.1.0"

__all__ = [
    "NOT_APPLICABLE",
    "ComparisonError",
    "ComparisonView",
    "InvalidSelection",
    "MissingRatingData",
    "RatingTable",
    "RatingTableError",
    "SelectionState",
    "SkillComparisonModel",
    "UndefinedAggregate",
    "load_rating_table",
]
