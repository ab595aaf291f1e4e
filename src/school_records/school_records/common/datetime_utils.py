from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a wire/DB value into a date.

    Accepts date, datetime and ISO strings (a time part is ignored).
    Anything else yields None instead of raising.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()[:10]
        try:
            return parse_iso_date(text)
        except ValueError:
            return None
    return None
