from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Optional, Sequence

from ..core.constants import DAYS_PER_WEEK, MAX_WEEK_OF_MONTH, MONTH_NAMES
from .model import Record, ViewerContext, coerce_int


@dataclass(frozen=True)
class FilterSelection:
    """Current filter values. None means "no constraint" for that dimension."""

    school_year: Optional[str] = None
    grade: Optional[int] = None
    month: Optional[int] = None
    week: Optional[int] = None

    @property
    def is_student_view_enabled(self) -> bool:
        return bool(self.school_year) and self.grade is not None


def week_of_month(d: date) -> int:
    """Day 1-7 -> 1, 8-14 -> 2, ..., 29-31 -> 5."""
    return math.ceil(d.day / DAYS_PER_WEEK)


def coerce_school_year(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_grade(value: Any) -> Optional[int]:
    return coerce_int(value)


def coerce_month(value: Any) -> Optional[int]:
    month = coerce_int(value)
    if month is None or not 1 <= month <= 12:
        return None
    return month


def coerce_week(value: Any) -> Optional[int]:
    week = coerce_int(value)
    if week is None or not 1 <= week <= MAX_WEEK_OF_MONTH:
        return None
    return week


# Predicates: an unset filter always matches; a record missing the field never
# matches a set filter.


def matches_school_year(record: Record, selection: FilterSelection) -> bool:
    if not selection.school_year:
        return True
    return record.student.school_year == selection.school_year


def matches_grade(record: Record, selection: FilterSelection) -> bool:
    if selection.grade is None:
        return True
    return record.student.grade is not None and record.student.grade == selection.grade


def matches_month(record: Record, selection: FilterSelection) -> bool:
    if selection.month is None:
        return True
    return record.record_date is not None and record.record_date.month == selection.month


def matches_week(record: Record, selection: FilterSelection) -> bool:
    if selection.week is None:
        return True
    return record.record_date is not None and week_of_month(record.record_date) == selection.week


class FilterSelector:
    """Mutable filter state behind the overview's filter controls.

    An Adviser's grade is pre-seeded to their own grade and locked: calls to
    `set_grade` are ignored while locked. No other validation happens here,
    values the aggregation cannot use are stored as "unset".
    """

    def __init__(self, viewer: ViewerContext):
        self._viewer = viewer
        self._grade_locked = viewer.is_adviser
        seeded_grade = coerce_grade(viewer.grade) if self._grade_locked else None
        self._selection = FilterSelection(grade=seeded_grade)

    @classmethod
    def from_args(cls, args: Mapping[str, Any], viewer: ViewerContext) -> "FilterSelector":
        selector = cls(viewer)
        selector.set_school_year(args.get("school_year"))
        selector.set_grade(args.get("grade"))
        selector.set_month(args.get("month"))
        selector.set_week(args.get("week"))
        return selector

    @property
    def selection(self) -> FilterSelection:
        return self._selection

    @property
    def grade_locked(self) -> bool:
        return self._grade_locked

    def set_school_year(self, value: Any) -> None:
        self._selection = replace(self._selection, school_year=coerce_school_year(value))

    def set_grade(self, value: Any) -> bool:
        if self._grade_locked:
            return False
        self._selection = replace(self._selection, grade=coerce_grade(value))
        return True

    def set_month(self, value: Any) -> None:
        self._selection = replace(self._selection, month=coerce_month(value))

    def set_week(self, value: Any) -> None:
        self._selection = replace(self._selection, week=coerce_week(value))

    def options(self, *, school_years: Sequence[str], grades: Sequence[int]) -> dict:
        """Choices for the filter form, with the current value of each control."""

        s = self._selection
        return {
            "school_years": list(school_years),
            "grades": list(grades),
            "months": [{"value": i, "label": name} for i, name in enumerate(MONTH_NAMES, start=1)],
            "weeks": list(range(1, MAX_WEEK_OF_MONTH + 1)),
            "grade_locked": self._grade_locked,
            "selected": {
                "school_year": s.school_year or "",
                "grade": s.grade if s.grade is not None else "",
                "month": s.month or "",
                "week": s.week or "",
            },
        }
