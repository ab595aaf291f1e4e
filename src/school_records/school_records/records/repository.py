from __future__ import annotations

from typing import Protocol, Sequence

from .model import Record


class RecordRepository(Protocol):
    """Source of monitored records.

    Every call returns a fresh list; callers may treat it as an immutable snapshot.
    """

    def list_all(self) -> Sequence[Record]:
        raise NotImplementedError

    def list_for_grade(self, grade: int) -> Sequence[Record]:
        """Records of students in one grade (the per-adviser slice)."""

        raise NotImplementedError
