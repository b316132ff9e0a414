from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, FrozenSet, Iterable, List, Literal, Optional, Tuple

from guild_build.core import (
    NOT_APPLICABLE,
    ComparisonView,
    RadarSeries,
    Score,
    SelectionState,
    TrendPoint,
    TrendSeries,
)
from guild_build.errors import ComparisonError, RatingTableError, UndefinedAggregate
from guild_build.ratings import RatingTable, radar_points, similarity_score, trend_points


FieldName = Literal["selection", "view"]
Subscriber = Callable[[object], None]


class SkillComparisonModel:
    """
    Observable comparison model for a chart front-end.

    Holds the read-only rating table and the current SelectionState, and
    derives the comparison view from them on demand. Two fields can be
    subscribed to:
      - selection: SelectionState
      - view: ComparisonView (recomputed on every change)

    Mutators that would select an unknown role/level raise InvalidSelection
    and leave the state untouched. With view subscribers attached, a change
    whose view cannot be computed (MissingRatingData on a non-strict table)
    is rolled back and the error propagates; nobody is notified.
    """

    def __init__(self, table: RatingTable) -> None:
        if not table.roles:
            raise RatingTableError("rating table has no roles")
        if not table.levels:
            raise RatingTableError("no levels configured")

        self.table = table
        role_a = table.roles[0]
        level = table.levels[0]
        self.selection = SelectionState(
            role_a=role_a,
            level_a=level,
            level_b=level,
            selected_skills=frozenset(table.skills_for(role_a, level)),
        )
        self._subscribers: Dict[FieldName, List[Subscriber]] = {
            "selection": [],
            "view": [],
        }

    # ---- read accessors ----

    @property
    def roles(self) -> Tuple[str, ...]:
        return self.table.roles

    @property
    def levels(self) -> Tuple[str, ...]:
        return self.table.levels

    @property
    def skills(self) -> Tuple[str, ...]:
        """Skill universe of (role_a, level_a), lexicographically ordered."""
        return self.table.skills_for(self.selection.role_a, self.selection.level_a)

    @property
    def role_a(self) -> str:
        return self.selection.role_a

    @property
    def role_b(self) -> Optional[str]:
        return self.selection.role_b

    @property
    def level_a(self) -> str:
        return self.selection.level_a

    @property
    def level_b(self) -> str:
        return self.selection.level_b

    @property
    def selected_skills(self) -> FrozenSet[str]:
        return self.selection.selected_skills

    def subscribe(self, field: FieldName, fn: Subscriber) -> Callable[[], None]:
        """
        Subscribe to a field; returns an unsubscribe callable.
        Invokes the callback immediately with the current value.
        """
        if field not in self._subscribers:
            raise ValueError(f"Unknown field '{field}'")

        self._subscribers[field].append(fn)
        fn(self._get_value(field))

        def unsubscribe() -> None:
            try:
                self._subscribers[field].remove(fn)
            except ValueError:
                pass

        return unsubscribe

    # ---- mutations ----

    def set_role_a(self, role: str) -> None:
        self._apply(role_a=self.table.require_role(role, field="role_a"))

    def set_role_b(self, role: Optional[str]) -> None:
        """None (or "") clears the comparison role."""
        if role is None or role == "":
            self._apply(role_b=None)
            return
        self._apply(role_b=self.table.require_role(role, field="role_b"))

    def set_level_a(self, level: str) -> None:
        self._apply(level_a=self.table.require_level(level, field="level_a"))

    def set_level_b(self, level: str) -> None:
        self._apply(level_b=self.table.require_level(level, field="level_b"))

    def toggle_skill(self, skill: str) -> None:
        current = self.selection.selected_skills
        if skill in current:
            self._apply(selected_skills=current - {skill})
        else:
            self._apply(selected_skills=current | {skill})

    def set_selected_skills(self, skills: Iterable[str]) -> None:
        self._apply(selected_skills=frozenset(skills))

    def select_all(self) -> None:
        self._apply(selected_skills=frozenset(self.skills))

    def clear_all(self) -> None:
        self._apply(selected_skills=frozenset())

    # ---- derived values ----

    def compute_similarity(self) -> Score:
        sel = self.selection
        if sel.role_b is None:
            return NOT_APPLICABLE
        try:
            return similarity_score(
                self.table,
                role_a=sel.role_a,
                level_a=sel.level_a,
                role_b=sel.role_b,
                level_b=sel.level_b,
                skills=sel.selected_skills,
            )
        except UndefinedAggregate:
            return NOT_APPLICABLE

    def compute_radar_series(self) -> Tuple[RadarSeries, ...]:
        return tuple(
            RadarSeries(
                label=f"{role} ({level})",
                role=role,
                level=level,
                points=tuple(radar_points(self.table, role=role, level=level, skills=self.selection.selected_skills)),
            )
            for role, level in self._active_profiles()
        )

    def compute_trend_series(self) -> Tuple[TrendSeries, ...]:
        out: List[TrendSeries] = []
        for role, _level in self._active_profiles():
            try:
                points = trend_points(self.table, role=role, skills=self.selection.selected_skills)
            except UndefinedAggregate:
                points = [TrendPoint(level=level, average=NOT_APPLICABLE) for level in self.table.levels]
            out.append(TrendSeries(label=role, role=role, points=tuple(points)))
        return tuple(out)

    def view(self) -> ComparisonView:
        return ComparisonView(
            similarity=self.compute_similarity(),
            radar=self.compute_radar_series(),
            trend=self.compute_trend_series(),
        )

    # ---- internal ----

    def _active_profiles(self) -> List[Tuple[str, str]]:
        sel = self.selection
        profiles = [(sel.role_a, sel.level_a)]
        if sel.role_b is not None:
            profiles.append((sel.role_b, sel.level_b))
        return profiles

    def _apply(self, **changes) -> None:
        updated = replace(self.selection, **changes)
        if updated == self.selection:
            return

        previous = self.selection
        self.selection = updated
        view: Optional[ComparisonView] = None
        if self._subscribers["view"]:
            # view subscribers must see a computable view; otherwise roll back
            try:
                view = self.view()
            except ComparisonError:
                self.selection = previous
                raise

        self._notify("selection", self.selection)
        if view is not None:
            self._notify("view", view)

    def _notify(self, field: FieldName, value: object) -> None:
        for fn in list(self._subscribers[field]):
            fn(value)

    def _get_value(self, field: FieldName):
        if field == "selection":
            return self.selection
        if field == "view":
            return self.view()
        raise ValueError(f"Unknown field '{field}'")
