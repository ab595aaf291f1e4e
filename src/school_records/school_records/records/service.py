from __future__ import annotations

import logging
from typing import Sequence

from ..classes.service import ClassService
from .filters import FilterSelection
from .model import Record, ViewerContext
from .repository import RecordRepository
from .views import RecordViewModel, ReferenceLists, compute_views

logger = logging.getLogger(__name__)


class RecordOverviewService:
    """Use case: the record overview (grade matrix + student breakdowns)."""

    def __init__(self, records: RecordRepository, classes: ClassService):
        self._records = records
        self._classes = classes

    def load_records(self, viewer: ViewerContext) -> list[Record]:
        """Fresh snapshot of the records this viewer may see.

        Advisers get the upstream per-adviser slice (their own grade).
        """

        if viewer.is_adviser and viewer.grade is not None:
            return list(self._records.list_for_grade(int(viewer.grade)))
        return list(self._records.list_all())

    def reference_lists(self) -> ReferenceLists:
        return ReferenceLists(
            school_years=tuple(self._classes.school_year_labels()),
            grades=tuple(self._classes.grades()),
        )

    def build_overview(self, viewer: ViewerContext, selection: FilterSelection) -> RecordViewModel:
        records = self.load_records(viewer)
        reference = self.reference_lists()
        logger.debug(
            "Building overview: %d records, %d grades, selection=%s",
            len(records),
            len(reference.grades),
            selection,
        )
        return compute_views(records, reference, viewer, selection)

    def export_rows(self, viewer: ViewerContext, selection: FilterSelection) -> list[dict]:
        """Grade matrix (totals row last) as dicts keyed by column name."""

        table = self.build_overview(viewer, selection).grade_table
        rows: Sequence[list] = list(table.rows) + ([table.totals] if table.totals else [])
        return [dict(zip(table.columns, row)) for row in rows]
