from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import UserType
from ..core.exceptions import AuthenticationError, ValidationError
from ..records.model import ViewerContext
from .repository import UserRepository

logger = logging.getLogger(__name__)

BAD_CREDENTIALS = "Invalid username or password"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    firstname: str
    lastname: str
    user_type: UserType
    grade: Optional[int]
    section: Optional[str]

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()

    def to_viewer(self) -> ViewerContext:
        return ViewerContext(
            user_type=self.user_type,
            grade=self.grade,
            section=self.section,
            user_id=self.user_id,
            full_name=self.full_name,
        )


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        try:
            username = require_non_empty(username, "Username")
        except ValidationError:
            raise AuthenticationError(BAD_CREDENTIALS)

        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            logger.info("Rejected login for %r", username)
            raise AuthenticationError(BAD_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected login for %r", username)
            raise AuthenticationError(BAD_CREDENTIALS)

        return SessionUser(
            user_id=user.user_id,
            firstname=user.firstname,
            lastname=user.lastname,
            user_type=user.user_type,
            grade=user.grade,
            section=user.section,
        )
