from __future__ import annotations

from datetime import date

from src.school_records.school_records.classes.model import ClassSection, SchoolYear
from src.school_records.school_records.classes.service import ClassService
from src.school_records.school_records.core.enums import UserType
from src.school_records.school_records.records.filters import FilterSelection
from src.school_records.school_records.records.model import Record, Student, ViewerContext
from src.school_records.school_records.records.service import RecordOverviewService


class FakeRecordRepo:
    def __init__(self, records):
        self._records = records
        self.calls = []

    def list_all(self):
        self.calls.append(("all", None))
        return list(self._records)

    def list_for_grade(self, grade):
        self.calls.append(("grade", grade))
        return [r for r in self._records if r.student.grade == grade]


class FakeClassRepo:
    def __init__(self, classes=(), years=()):
        self._classes = list(classes)
        self._years = list(years)

    def list_classes(self):
        return list(self._classes)

    def list_school_years(self):
        return list(self._years)

    def list_sections_for_grade(self, grade):
        return [c.section for c in self._classes if c.grade == grade]


def rec(grade, category, sanction=False):
    return Record(
        record_date=date(2024, 9, 2),
        monitored_category=category,
        has_sanction=sanction,
        student=Student(student_id=grade * 10, name=f"S{grade}", grade=grade, section=f"Sec{grade}", school_year="2024"),
    )


def _service(records, classes=()):
    repo = FakeRecordRepo(records)
    class_repo = FakeClassRepo(classes=classes, years=[SchoolYear(1, "2024")])
    return repo, RecordOverviewService(repo, ClassService(class_repo))


def test_adviser_loads_only_own_grade():
    repo, svc = _service([rec(7, "Absent"), rec(8, "Absent")])
    viewer = ViewerContext(user_type=UserType.ADVISER, grade=7, section="Sec7")

    records = svc.load_records(viewer)

    assert repo.calls == [("grade", 7)]
    assert [r.student.grade for r in records] == [7]


def test_principal_loads_everything():
    repo, svc = _service([rec(7, "Absent"), rec(8, "Absent")])

    assert len(svc.load_records(ViewerContext(user_type=UserType.PRINCIPAL))) == 2
    assert repo.calls == [("all", None)]


def test_reference_grades_come_from_classes_or_defaults():
    _, svc = _service([], classes=[ClassSection(1, 9, "Molave"), ClassSection(2, 7, "Rosal"), ClassSection(3, 7, "X")])
    assert svc.reference_lists().grades == (7, 9)
    assert svc.reference_lists().school_years == ("2024",)

    _, svc = _service([])
    assert svc.reference_lists().grades == (7, 8, 9, 10)


def test_build_overview_uses_reference_grades():
    _, svc = _service([rec(7, "Absent", sanction=True), rec(8, "Clinic")])

    view = svc.build_overview(ViewerContext(user_type=UserType.ADMIN), FilterSelection())

    assert [row[0] for row in view.grade_table.rows] == [7, 8, 9, 10]
    assert view.grade_table.totals[1] == 1  # Absent
    assert view.grade_table.totals[-1] == 1  # Sanction


def test_export_rows_end_with_totals():
    _, svc = _service([rec(7, "Tardy")])

    rows = svc.export_rows(ViewerContext(user_type=UserType.ADMIN), FilterSelection())

    assert rows[0]["Grade"] == 7
    assert rows[0]["Tardy"] == 1
    assert rows[-1]["Grade"] == "Total"
    assert rows[-1]["Tardy"] == 1
    assert len(rows) == 5
