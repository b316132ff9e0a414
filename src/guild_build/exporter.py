# exporter.py
from __future__ import annotations

import csv
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from guild_build.core import ComparisonView, NotApplicable, Score
from guild_build.ratings import q2


@dataclass(frozen=True)
class ExportRadarRow:
    series: str
    skill: str
    rating: Decimal


@dataclass(frozen=True)
class ExportTrendRow:
    series: str
    level: str
    average: Optional[Decimal]   # None when undefined for the selection


@dataclass(frozen=True)
class ExportResult:
    similarity: Optional[Decimal]
    radar: List[ExportRadarRow]
    trend: List[ExportTrendRow]


def _to_decimal(v: Union[float, Decimal]) -> Decimal:
    # str() avoids binary float surprises
    return q2(Decimal(str(v)))


def _fmt(value: Optional[Decimal]) -> str:
    return "N/A" if value is None else format(value, ".2f")


def _score(value: Score) -> Optional[Decimal]:
    if isinstance(value, NotApplicable):
        return None
    return q2(value)


def build_export(view: ComparisonView) -> ExportResult:
    """
    Flatten a ComparisonView into rows.
    Ordering: series order of the view, then skill (radar) / level (trend)
    order as computed.
    """
    radar = [
        ExportRadarRow(series=s.label, skill=p.skill, rating=_to_decimal(p.rating))
        for s in view.radar
        for p in s.points
    ]
    trend = [
        ExportTrendRow(
            series=s.label,
            level=p.level,
            average=None if isinstance(p.average, NotApplicable) else _to_decimal(p.average),
        )
        for s in view.trend
        for p in s.points
    ]
    return ExportResult(similarity=_score(view.similarity), radar=radar, trend=trend)


def write_rows(result: ExportResult, f: TextIO) -> None:
    w = csv.writer(f)

    w.writerow(["[Similarity]"])
    w.writerow([_fmt(result.similarity)])
    w.writerow([])

    # Radar section (keep 2 decimals)
    w.writerow(["[Radar]"])
    for r in result.radar:
        w.writerow([r.series, r.skill, _fmt(r.rating)])
    w.writerow([])

    w.writerow(["[Trend]"])
    for t in result.trend:
        w.writerow([t.series, t.level, _fmt(t.average)])


def write_csv(result: ExportResult, path: Path) -> None:
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as f:
        write_rows(result, f)


def view_to_json(view: ComparisonView) -> Dict[str, Any]:
    def _num(value: Any) -> Any:
        if isinstance(value, NotApplicable):
            return str(value)
        return float(value)

    return {
        "similarity": _num(view.similarity),
        "radar": [
            {
                "label": s.label,
                "role": s.role,
                "level": s.level,
                "points": [{"skill": p.skill, "rating": p.rating} for p in s.points],
            }
            for s in view.radar
        ],
        "trend": [
            {
                "label": s.label,
                "role": s.role,
                "points": [{"level": p.level, "average": _num(p.average)} for p in s.points],
            }
            for s in view.trend
        ],
    }
