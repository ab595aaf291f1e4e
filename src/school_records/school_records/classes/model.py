from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassSection:
    """A grade/section pair, e.g. Grade 7 - Sampaguita."""

    class_id: int
    grade: int
    section: str

    @property
    def label(self) -> str:
        return f"{self.grade} - {self.section}"


@dataclass(frozen=True)
class SchoolYear:
    school_year_id: int
    school_year: str
