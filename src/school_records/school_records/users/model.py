from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import UserType


@dataclass(frozen=True)
class User:
    """Domain entity: User (plain data, no DB access)."""

    user_id: int
    firstname: str
    lastname: str
    username: str
    password_hash: str
    user_type: UserType
    grade: Optional[int] = None
    section: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()
