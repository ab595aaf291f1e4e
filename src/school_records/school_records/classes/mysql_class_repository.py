from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ClassSection, SchoolYear
from .repository import ClassRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_classes(self) -> Sequence[ClassSection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, grade, section FROM classes ORDER BY class_id")
            rows = fetchall(cur)
            return [
                ClassSection(class_id=int(r["class_id"]), grade=int(r["grade"]), section=r["section"])
                for r in rows
            ]

    def create_class(self, *, grade: int, section: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(grade, section) VALUES(%s,%s)", (int(grade), section))
            return int(cur.lastrowid)

    def list_sections_for_grade(self, grade: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT section FROM classes WHERE grade=%s ORDER BY section", (int(grade),))
            return [r["section"] for r in fetchall(cur)]

    def list_school_years(self) -> Sequence[SchoolYear]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT school_year_id, school_year FROM school_years ORDER BY school_year")
            rows = fetchall(cur)
            return [
                SchoolYear(school_year_id=int(r["school_year_id"]), school_year=str(r["school_year"]))
                for r in rows
            ]

    def create_school_year(self, *, school_year: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO school_years(school_year) VALUES(%s)", (school_year,))
            return int(cur.lastrowid)
