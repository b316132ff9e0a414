from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence


# ---------------------------------------------------------------------------
# Level schemes
#
# Rating tables name their seniority stages in one of two ways. The level
# enumeration is configuration: a table is always read against exactly one
# scheme, and its order is the canonical trend order.
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LevelScheme:
    name: str
    levels: Sequence[str]


SCHEME_NUMBERED = LevelScheme(
    name="NUMBERED",
    levels=("level_1", "level_2", "level_3", "level_4"),
)

SCHEME_NAMED = LevelScheme(
    name="NAMED",
    levels=("entry", "mid", "senior", "principal"),
)

LEVEL_SCHEMES = (SCHEME_NUMBERED, SCHEME_NAMED)
DEFAULT_LEVEL_SCHEME = SCHEME_NUMBERED


def get_level_scheme(name: str) -> LevelScheme:
    """Resolve a shipped scheme by name (case-insensitive)."""
    wanted = str(name).strip().upper()
    for scheme in LEVEL_SCHEMES:
        if scheme.name == wanted:
            return scheme
    known = ", ".join(s.name for s in LEVEL_SCHEMES)
    raise ValueError(f"Unknown level scheme '{name}' (known: {known})")


def custom_level_scheme(levels: Iterable[str]) -> LevelScheme:
    cleaned = tuple(str(level) for level in levels)
    issues = validate_levels(cleaned)
    if issues:
        raise ValueError("Invalid level list:\n- " + "\n- ".join(issues))
    return LevelScheme(name="CUSTOM", levels=cleaned)


def detect_level_scheme(levels: Iterable[str]) -> Optional[LevelScheme]:
    """
    Return the shipped scheme whose level set equals `levels`, or None.
    Order is ignored; a table keyed by the right names in any order still
    belongs to the scheme.
    """
    wanted = set(levels)
    for scheme in LEVEL_SCHEMES:
        if set(scheme.levels) == wanted:
            return scheme
    return None


def validate_levels(levels: Sequence[str]) -> List[str]:
    """
    Returns issues (strings). Does not raise.
    Checks:
      - at least one level
      - no blank names
      - no duplicates
    """
    issues: List[str] = []
    if not levels:
        issues.append("level list is empty")
    blanks = [i for i, level in enumerate(levels) if not str(level).strip()]
    if blanks:
        issues.append(f"blank level names at positions {blanks}")
    dupes = sorted(level for level, count in Counter(levels).items() if count > 1)
    if dupes:
        issues.append(f"duplicate level names: {dupes}")
    return issues
