from __future__ import annotations

import logging
import re
from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import GRADE_LEVELS
from ..core.enums import UserType
from ..core.exceptions import AuthorizationError, ValidationError
from .model import ClassSection, SchoolYear
from .repository import ClassRepository

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please fill in all fields"


def parse_grade_level(value: Any) -> Optional[int]:
    """Accept 7, "7", "G7" or "Grade 7"; None if it is not a number."""

    if value is None:
        return None
    m = re.fullmatch(r"(?:g|grade)?\s*(\d+)", str(value).strip(), flags=re.IGNORECASE)
    return int(m.group(1)) if m else None


class ClassService:
    """Use case: manage grade/sections and school years (admin)."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self, search: str = "") -> list[ClassSection]:
        term = (search or "").strip()
        items = [
            c
            for c in self._classes.list_classes()
            if term in str(c.grade) or term.lower() in c.section.lower()
        ]
        items.sort(key=lambda c: c.grade)
        return items

    def list_school_years(self, search: str = "") -> list[SchoolYear]:
        term = (search or "").strip()
        return [y for y in self._classes.list_school_years() if term in y.school_year]

    def grades(self) -> list[int]:
        """Distinct configured grades, ascending; the default levels when none exist."""

        found = sorted({c.grade for c in self._classes.list_classes()})
        return found or list(GRADE_LEVELS)

    def school_year_labels(self) -> list[str]:
        return [y.school_year for y in self._classes.list_school_years()]

    def sections_for_grade(self, grade: Any) -> Sequence[str]:
        level = parse_grade_level(grade)
        if level is None:
            return []
        return self._classes.list_sections_for_grade(level)

    def add_class(self, *, current_user_type: Optional[UserType], grade: Any, section: str) -> int:
        if current_user_type != UserType.ADMIN:
            raise AuthorizationError("You are not allowed to manage classes")

        section = require_non_empty(section, "Section", message=MISSING_FIELDS)
        if grade is None or not str(grade).strip():
            raise ValidationError(MISSING_FIELDS)

        level = parse_grade_level(grade)
        if level not in GRADE_LEVELS:
            raise ValidationError("Invalid grade")

        if any(c.section == section for c in self._classes.list_classes()):
            raise ValidationError("Section already exists")

        class_id = self._classes.create_class(grade=level, section=section)
        logger.info("Added class %s - %s (id=%s)", level, section, class_id)
        return class_id

    def add_school_year(self, *, current_user_type: Optional[UserType], school_year: str) -> int:
        if current_user_type != UserType.ADMIN:
            raise AuthorizationError("You are not allowed to manage school years")

        school_year = require_non_empty(school_year, "School year", message=MISSING_FIELDS)
        if any(y.school_year == school_year for y in self._classes.list_school_years()):
            raise ValidationError("School year already exists")

        school_year_id = self._classes.create_school_year(school_year=school_year)
        logger.info("Added school year %s (id=%s)", school_year, school_year_id)
        return school_year_id
