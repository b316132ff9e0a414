from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple


class ComparisonError(Exception):
    """Base class for every failure raised by the comparison core."""


class InvalidSelection(ComparisonError, ValueError):
    """A role or level that is not part of the rating table was requested.

    Attributes
    ----------
    field:
        Which selection slot was being changed (e.g. "role_a", "level_b").
    value:
        The rejected value.
    choices:
        The values that would have been accepted.
    """

    def __init__(self, field: str, value: object, choices: Iterable[str] = ()) -> None:
        self.field = field
        self.value = value
        self.choices: Tuple[str, ...] = tuple(choices)
        super().__init__(self.status)

    @property
    def status(self) -> str:
        if self.choices:
            return f"invalid {self.field}: {self.value!r} (expected one of: {', '.join(self.choices)})"
        return f"invalid {self.field}: {self.value!r}"


class MissingRatingData(ComparisonError, LookupError):
    """A (role, level, skill) cell is absent although the selection itself is valid."""

    def __init__(self, role: str, level: str, skill: str) -> None:
        self.role = role
        self.level = level
        self.skill = skill
        super().__init__(f"no rating for skill {skill!r} at {role!r} / {level!r}")


class UndefinedAggregate(ComparisonError):
    """An average was requested over an empty skill selection."""

    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__(f"{what}: no skills selected")


class RatingTableError(ComparisonError, ValueError):
    """The rating table could not be parsed or violates its structural invariants."""

    def __init__(self, message: str, *, issues: Optional[Sequence[str]] = None) -> None:
        self.issues: Tuple[str, ...] = tuple(issues or ())
        if self.issues:
            message = message + ":\n- " + "\n- ".join(self.issues)
        super().__init__(message)
