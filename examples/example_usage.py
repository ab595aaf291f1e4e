"""Example: print the record overview through the service layer (no Flask).

Controllers are a thin layer; the filtering and counting live in services.
"""

import importlib
import logging

from config import get_settings_module

from src.school_records.school_records.container import build_container
from src.school_records.school_records.core.enums import UserType
from src.school_records.school_records.records.filters import FilterSelection
from src.school_records.school_records.records.model import ViewerContext


def main():
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    viewer = ViewerContext(user_type=UserType.PRINCIPAL, full_name="Demo Principal")
    view = container.record_service.build_overview(viewer, FilterSelection(school_year="2024-2025"))

    table = view.grade_table
    print(" | ".join(table.columns))
    for row in table.rows + [table.totals]:
        print(" | ".join(str(cell) for cell in row))


if __name__ == "__main__":
    main()
