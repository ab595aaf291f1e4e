from __future__ import annotations

from typing import Any, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Record, parse_records
from .repository import RecordRepository

_SELECT_RECORDS = """
    SELECT r.record_id, r.record_date, r.monitored_record, r.sanction,
           s.student_id, s.name, s.grade, s.section, s.school_year
    FROM records r
    JOIN students s ON s.student_id = r.student_id
"""


def _to_wire(row: dict[str, Any]) -> dict[str, Any]:
    """Shape a joined SQL row like the backend's JSON record."""
    return {
        "record_id": row.get("record_id"),
        "record_date": row.get("record_date"),
        "monitored_record": row.get("monitored_record"),
        "sanction": bool(row.get("sanction")),
        "student": {
            "id": row.get("student_id"),
            "name": row.get("name"),
            "grade": row.get("grade"),
            "section": row.get("section"),
            "schoolYear": row.get("school_year"),
        },
    }


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Record]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RECORDS + " ORDER BY r.record_date, r.record_id")
            rows = fetchall(cur)
        return parse_records(_to_wire(r) for r in rows)

    def list_for_grade(self, grade: int) -> Sequence[Record]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_RECORDS + " WHERE s.grade=%s ORDER BY r.record_date, r.record_id", (int(grade),))
            rows = fetchall(cur)
        return parse_records(_to_wire(r) for r in rows)
