from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Sequence

from .aggregation import (
    CATEGORIES,
    SANCTION,
    StudentTally,
    calculate_total_for_category,
    count_frequency,
    group_adviser_students,
    group_students_by_grade,
)
from .filters import FilterSelection
from .model import Record, ViewerContext

NO_STUDENTS_MESSAGE = "No students found for the selected filters."
NO_GRADES_MESSAGE = "No grades configured."


@dataclass(frozen=True)
class ReferenceLists:
    """Canonical grades/school years defining the table rows."""

    school_years: tuple[str, ...] = ()
    grades: tuple[int, ...] = ()


@dataclass(frozen=True)
class TableView:
    title: str
    columns: list[str]
    rows: list[list[Any]]
    totals: Optional[list[Any]] = None
    empty_message: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class RecordViewModel:
    grade_table: TableView
    student_table: Optional[TableView]
    adviser_table: Optional[TableView]
    selection: FilterSelection = field(default_factory=FilterSelection)

    def to_dict(self) -> dict:
        return asdict(self)


def build_grade_table(records: Sequence[Record], grades: Sequence[int], selection: FilterSelection) -> TableView:
    columns = list(CATEGORIES) + [SANCTION]
    rows = [[grade] + [count_frequency(records, grade, c, selection) for c in columns] for grade in grades]
    totals = ["Total"] + [calculate_total_for_category(records, grades, c, selection) for c in columns]
    return TableView(
        title="Table Overview",
        columns=["Grade"] + columns,
        rows=rows,
        totals=totals,
        empty_message=NO_GRADES_MESSAGE,
    )


def build_student_table(title: str, students: dict[int, StudentTally]) -> TableView:
    rows = [[s.name] + [s.count(c) for c in CATEGORIES] for s in students.values()]
    return TableView(
        title=title,
        columns=["Name"] + list(CATEGORIES),
        rows=rows,
        empty_message=NO_STUDENTS_MESSAGE,
    )


def compute_views(
    records: Sequence[Record],
    reference: ReferenceLists,
    viewer: ViewerContext,
    selection: FilterSelection,
) -> RecordViewModel:
    """Pure projection of (records, reference lists, viewer, filters) into tables.

    Called again from scratch whenever any input changes.
    """

    records = tuple(records or ())
    grade_table = build_grade_table(records, reference.grades, selection)

    student_table = None
    if selection.is_student_view_enabled:
        student_table = build_student_table("Student Details", group_students_by_grade(records, selection))

    adviser_table = None
    adviser_students = group_adviser_students(records, viewer)
    if adviser_students:
        adviser_table = build_student_table("Adviser's Student Details", adviser_students)

    return RecordViewModel(
        grade_table=grade_table,
        student_table=student_table,
        adviser_table=adviser_table,
        selection=selection,
    )
