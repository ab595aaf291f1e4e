from __future__ import annotations

from datetime import date

import pytest

from src.school_records.school_records.core.enums import UserType
from src.school_records.school_records.core.exceptions import AuthorizationError
from src.school_records.school_records.dashboards.service import DashboardService
from src.school_records.school_records.records.model import Record, Student, ViewerContext


class FakeRecordRepo:
    def __init__(self, records):
        self._records = records

    def list_all(self):
        return list(self._records)

    def list_for_grade(self, grade):
        return [r for r in self._records if r.student.grade == grade]


def rec(grade, sanction):
    return Record(
        record_date=date(2024, 9, 2),
        monitored_category="Offense",
        has_sanction=sanction,
        student=Student(student_id=grade, name="S", grade=grade, section="X", school_year="2024"),
    )


SVC = DashboardService(FakeRecordRepo([rec(7, True), rec(8, True), rec(8, False)]))


@pytest.mark.parametrize(
    "user_type,title,labels",
    [
        (UserType.ADMIN, "Admin Dashboard", ["Report", "Classes"]),
        (UserType.ADVISER, "Adviser Dashboard", ["Report", "Students"]),
        (UserType.PRINCIPAL, "Principal Dashboard", ["Report", "Sanctions"]),
    ],
)
def test_menu_per_role(user_type, title, labels):
    board = SVC.build(ViewerContext(user_type=user_type, grade=7, full_name="Ana Reyes"))

    assert board.title == title
    assert [link.label for link in board.links] == labels
    assert board.welcome == "Welcome, Ana Reyes!"


def test_sanction_badge_is_scoped_for_advisers():
    assert SVC.build(ViewerContext(user_type=UserType.PRINCIPAL)).sanction_count == 2
    assert SVC.build(ViewerContext(user_type=UserType.ADVISER, grade=8)).sanction_count == 1


def test_unknown_role_is_forbidden():
    with pytest.raises(AuthorizationError):
        SVC.build(ViewerContext(user_type=None))
