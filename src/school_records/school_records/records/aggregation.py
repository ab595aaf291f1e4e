from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from ..core.enums import MonitoredCategory
from .filters import FilterSelection, coerce_grade, matches_grade, matches_month, matches_school_year, matches_week
from .model import Record, ViewerContext

CATEGORIES: tuple[str, ...] = tuple(c.value for c in MonitoredCategory)
SANCTION = "Sanction"


@dataclass
class StudentTally:
    """Per-student category counts. Keys are raw category labels (None included)."""

    student_id: int
    name: str
    category_counts: Counter = field(default_factory=Counter)

    def count(self, category: Optional[str]) -> int:
        return int(self.category_counts.get(category, 0))


def _matches_category(record: Record, category: str) -> bool:
    if category == SANCTION and record.has_sanction:
        return True
    return record.monitored_category is not None and record.monitored_category == category


def count_frequency(
    records: Iterable[Record],
    entity: Any,
    category: str,
    selection: FilterSelection,
) -> int:
    """Count records of one grade (`entity`) matching `category`.

    School year, month and week filters apply; the selected grade does not,
    the row grade comes from `entity`. A non-numeric entity counts nothing.
    """

    grade = coerce_grade(entity)
    if grade is None:
        return 0

    total = 0
    for record in records:
        if record.student.grade != grade:
            continue
        if not _matches_category(record, category):
            continue
        if matches_school_year(record, selection) and matches_month(record, selection) and matches_week(record, selection):
            total += 1
    return total


def calculate_total_for_category(
    records: Sequence[Record],
    grades: Iterable[Any],
    category: str,
    selection: FilterSelection,
) -> int:
    """Column total over the reference grades (not the grades seen in records)."""
    return sum(count_frequency(records, grade, category, selection) for grade in grades)


def count_sanctions(records: Iterable[Record]) -> int:
    return sum(1 for r in records if r.has_sanction)


def _tally(records: Iterable[Record], admit) -> dict[int, StudentTally]:
    students: dict[int, StudentTally] = {}
    for record in records:
        if not admit(record):
            continue
        student = record.student
        tally = students.get(student.student_id)
        if tally is None:
            tally = StudentTally(student_id=student.student_id, name=student.name)
            students[student.student_id] = tally
        tally.category_counts[record.monitored_category] += 1
    return students


def group_students_by_grade(records: Iterable[Record], selection: FilterSelection) -> dict[int, StudentTally]:
    """Per-student counts for the selected school year and grade.

    Compatibility note: month and week filters are NOT applied here even though
    `count_frequency` honors them. The grade overview has always behaved this
    way; keep the two views consistent with what users already see.
    """

    return _tally(records, lambda r: matches_school_year(r, selection) and matches_grade(r, selection))


def group_adviser_students(records: Iterable[Record], viewer: ViewerContext) -> dict[int, StudentTally]:
    """Per-student counts for the adviser's own section, ignoring every filter."""

    if not viewer.is_adviser or not viewer.section:
        return {}
    return _tally(records, lambda r: r.student.section == viewer.section)
