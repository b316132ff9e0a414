from .compute import (
    effective_skills,
    q2,
    radar_points,
    similarity_score,
    trend_points,
)
from .loader import load_rating_table
from .table import RatingTable, validate_rating_table

__all__ = [
    "RatingTable",
    "effective_skills",
    "load_rating_table",
    "q2",
    "radar_points",
    "similarity_score",
    "trend_points",
    "validate_rating_table",
]
