from __future__ import annotations

from typing import Protocol, Sequence

from .model import ClassSection, SchoolYear


class ClassRepository(Protocol):
    def list_classes(self) -> Sequence[ClassSection]:
        raise NotImplementedError

    def create_class(self, *, grade: int, section: str) -> int:
        raise NotImplementedError

    def list_sections_for_grade(self, grade: int) -> Sequence[str]:
        raise NotImplementedError

    def list_school_years(self) -> Sequence[SchoolYear]:
        raise NotImplementedError

    def create_school_year(self, *, school_year: str) -> int:
        raise NotImplementedError
