from __future__ import annotations

from datetime import date
from typing import Optional

from src.school_records.school_records.core.enums import UserType
from src.school_records.school_records.records.aggregation import (
    CATEGORIES,
    SANCTION,
    calculate_total_for_category,
    count_frequency,
    count_sanctions,
    group_adviser_students,
    group_students_by_grade,
)
from src.school_records.school_records.records.filters import FilterSelection
from src.school_records.school_records.records.model import Record, Student, ViewerContext

ALL = FilterSelection()


def make_record(
    *,
    student_id: int = 1,
    name: str = "A",
    grade: Optional[int] = 7,
    section: str = "A",
    school_year: str = "2024",
    category: Optional[str] = "Absent",
    sanction: bool = False,
    on: Optional[date] = date(2024, 9, 2),
) -> Record:
    return Record(
        record_date=on,
        monitored_category=category,
        has_sanction=sanction,
        student=Student(student_id=student_id, name=name, grade=grade, section=section, school_year=school_year),
    )


def test_concrete_scenario_counts_and_totals():
    records = [make_record(), make_record(sanction=True)]
    grades = [7, 8]

    assert count_frequency(records, 7, "Absent", ALL) == 2
    assert count_frequency(records, 7, SANCTION, ALL) == 1
    assert count_frequency(records, 8, "Absent", ALL) == 0
    assert calculate_total_for_category(records, grades, "Absent", ALL) == 2
    assert calculate_total_for_category(records, grades, SANCTION, ALL) == 1


def test_grade_absent_from_records_counts_zero():
    records = [make_record(grade=7, category=c) for c in CATEGORIES]

    for category in CATEGORIES + (SANCTION,):
        assert count_frequency(records, 10, category, ALL) == 0


def test_entity_is_coerced_to_int():
    records = [make_record(grade=7)]

    assert count_frequency(records, "7", "Absent", ALL) == 1
    assert count_frequency(records, "G7", "Absent", ALL) == 0
    assert count_frequency(records, None, "Absent", ALL) == 0


def test_sanction_and_category_are_counted_independently():
    records = [
        make_record(category="Absent", sanction=True),
        make_record(category=None, sanction=True),
        make_record(category="Tardy", sanction=False),
    ]

    assert count_frequency(records, 7, "Absent", ALL) == 1
    assert count_frequency(records, 7, "Tardy", ALL) == 1
    assert count_frequency(records, 7, SANCTION, ALL) == 2


def test_total_equals_sum_over_reference_grades():
    records = [
        make_record(grade=7, category="Tardy"),
        make_record(grade=8, category="Tardy"),
        make_record(grade=8, category="Tardy", sanction=True),
        make_record(grade=11, category="Tardy"),
    ]
    grades = [7, 8, 9, 10]

    for category in CATEGORIES + (SANCTION,):
        expected = sum(count_frequency(records, g, category, ALL) for g in grades)
        assert calculate_total_for_category(records, grades, category, ALL) == expected
    # grade 11 is not a reference grade
    assert calculate_total_for_category(records, grades, "Tardy", ALL) == 3


def test_filters_are_conjunctive():
    records = [
        make_record(school_year="2024", on=date(2024, 9, 2)),
        make_record(school_year="2024", on=date(2024, 10, 2)),
        make_record(school_year="2023", on=date(2023, 9, 2)),
    ]

    both = FilterSelection(school_year="2024", month=9)
    assert count_frequency(records, 7, "Absent", both) == 1

    year_only = FilterSelection(school_year="2024")
    assert count_frequency(records, 7, "Absent", year_only) == 2

    month_only = FilterSelection(month=9)
    assert count_frequency(records, 7, "Absent", month_only) == 2

    assert count_frequency(records, 7, "Absent", ALL) == 3


def test_week_filter_uses_day_of_month():
    records = [
        make_record(on=date(2024, 9, 7)),
        make_record(on=date(2024, 9, 8)),
        make_record(on=date(2024, 9, 29)),
    ]

    assert count_frequency(records, 7, "Absent", FilterSelection(week=1)) == 1
    assert count_frequency(records, 7, "Absent", FilterSelection(week=2)) == 1
    assert count_frequency(records, 7, "Absent", FilterSelection(week=5)) == 1


def test_selected_grade_does_not_restrict_grade_rows():
    records = [make_record(grade=8)]

    assert count_frequency(records, 8, "Absent", FilterSelection(grade=7)) == 1


def test_malformed_records_do_not_match_and_do_not_raise():
    records = [
        make_record(grade=None),
        make_record(on=None),
        make_record(category=None),
        make_record(),
    ]

    assert count_frequency(records, 7, "Absent", ALL) == 2
    assert count_frequency(records, 7, "Absent", FilterSelection(month=9)) == 1
    assert count_frequency([], 7, "Absent", ALL) == 0
    assert calculate_total_for_category(records, [], "Absent", ALL) == 0


def test_group_students_by_year_and_grade():
    records = [
        make_record(student_id=1, name="A", category="Absent"),
        make_record(student_id=1, name="A", category="Absent"),
        make_record(student_id=1, name="A", category="Tardy"),
        make_record(student_id=2, name="B", category="Clinic"),
        make_record(student_id=3, name="C", grade=8),
        make_record(student_id=4, name="D", school_year="2023"),
    ]

    students = group_students_by_grade(records, FilterSelection(school_year="2024", grade=7))

    assert list(students) == [1, 2]
    assert students[1].count("Absent") == 2
    assert students[1].count("Tardy") == 1
    assert students[1].count("Clinic") == 0
    assert students[2].name == "B"


def test_group_students_ignores_month_and_week():
    records = [make_record(on=date(2024, 9, 2)), make_record(on=date(2024, 12, 30))]

    students = group_students_by_grade(records, FilterSelection(school_year="2024", grade=7, month=9, week=1))

    assert students[1].count("Absent") == 2


def test_group_students_keeps_uncategorised_records():
    students = group_students_by_grade([make_record(category=None)], ALL)

    assert students[1].count(None) == 1
    assert all(students[1].count(c) == 0 for c in CATEGORIES)


def test_group_students_is_repeatable():
    records = [make_record(student_id=i % 3, category=CATEGORIES[i % 7]) for i in range(20)]
    selection = FilterSelection(school_year="2024", grade=7)

    first = {k: dict(v.category_counts) for k, v in group_students_by_grade(records, selection).items()}
    second = {k: dict(v.category_counts) for k, v in group_students_by_grade(records, selection).items()}

    assert first == second


def test_adviser_view_is_scoped_to_own_section():
    records = [
        make_record(student_id=1, section="Rosal", school_year="2023"),
        make_record(student_id=2, section="Narra"),
    ]
    viewer = ViewerContext(user_type=UserType.ADVISER, grade=7, section="Rosal")

    students = group_adviser_students(records, viewer)

    assert list(students) == [1]


def test_adviser_view_empty_for_other_roles():
    records = [make_record(section="Rosal")]

    for user_type in (UserType.ADMIN, UserType.PRINCIPAL, None):
        viewer = ViewerContext(user_type=user_type, grade=7, section="Rosal")
        assert group_adviser_students(records, viewer) == {}


def test_count_sanctions_ignores_filters():
    records = [make_record(sanction=True), make_record(sanction=True, school_year="2020"), make_record()]

    assert count_sanctions(records) == 2
