from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str, *, message: Optional[str] = None) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message or f"{field_name} is required")
    return str(value).strip()
