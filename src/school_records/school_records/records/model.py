from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from ..common.datetime_utils import coerce_date
from ..core.enums import UserType
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Student:
    """Student reference embedded in every record."""

    student_id: int
    name: str
    grade: Optional[int]
    section: Optional[str]
    school_year: Optional[str]


@dataclass(frozen=True)
class Record:
    """One logged disciplinary/attendance event.

    `monitored_category` and `has_sanction` are independent: a record may carry
    a sanction whatever its category, and may have no category at all.
    """

    record_date: Optional[date]
    monitored_category: Optional[str]
    has_sanction: bool
    student: Student
    record_id: Optional[int] = None


@dataclass(frozen=True)
class ViewerContext:
    """Role and scope of the user looking at the overview."""

    user_type: Optional[UserType]
    grade: Optional[int] = None
    section: Optional[str] = None
    user_id: Optional[int] = None
    full_name: str = ""

    @property
    def is_adviser(self) -> bool:
        return self.user_type == UserType.ADVISER


ANONYMOUS_VIEWER = ViewerContext(user_type=None)


def coerce_int(value: Any) -> Optional[int]:
    """int() that returns None for missing/non-numeric values (bool excluded)."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def student_from_dict(raw: Any) -> Student:
    if not isinstance(raw, Mapping):
        raise ValidationError("Record has no student")

    student_id = coerce_int(_first(raw, "id", "student_id", "studentId"))
    if student_id is None:
        raise ValidationError("Student has no id")

    return Student(
        student_id=student_id,
        name=str(raw.get("name") or ""),
        grade=coerce_int(raw.get("grade")),
        section=_optional_str(raw.get("section")),
        school_year=_optional_str(_first(raw, "schoolYear", "school_year")),
    )


def record_from_dict(raw: Any) -> Record:
    """Build a Record from one backend row.

    Wire keys follow the REST backend (`record_date`, `monitored_record`,
    `sanction`, nested `student`); camelCase aliases are accepted too.
    Only a missing student identity is fatal; other malformed fields are
    coerced to None so the record simply stops matching filters on them.
    """

    if not isinstance(raw, Mapping):
        raise ValidationError("Record is not an object")

    return Record(
        record_date=coerce_date(_first(raw, "record_date", "recordDate")),
        monitored_category=_optional_str(_first(raw, "monitored_record", "monitoredCategory", "monitored_category")),
        has_sanction=bool(_first(raw, "sanction", "hasSanction", "has_sanction")),
        student=student_from_dict(raw.get("student")),
        record_id=coerce_int(_first(raw, "record_id", "id")),
    )


def parse_records(rows: Iterable[Any]) -> list[Record]:
    """Convert a batch of raw rows, skipping (and logging) the invalid ones."""

    out: list[Record] = []
    for index, raw in enumerate(rows or []):
        try:
            out.append(record_from_dict(raw))
        except ValidationError as e:
            logger.warning("Skipping record #%d: %s", index, e)
    return out
