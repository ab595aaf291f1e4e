from __future__ import annotations

from ..core.enums import UserType
from ..core.exceptions import AuthorizationError
from ..records.aggregation import count_sanctions
from ..records.model import ViewerContext
from ..records.repository import RecordRepository
from .model import Dashboard, NavLink

_MENUS: dict[UserType, tuple[str, list[NavLink]]] = {
    UserType.ADMIN: (
        "Admin Dashboard",
        [NavLink("Report", "report"), NavLink("Classes", "admin_classes")],
    ),
    UserType.ADVISER: (
        "Adviser Dashboard",
        [NavLink("Report", "report"), NavLink("Students", "report", "adviser-students")],
    ),
    UserType.PRINCIPAL: (
        "Principal Dashboard",
        [NavLink("Report", "report"), NavLink("Sanctions", "report", "grade-overview")],
    ),
}


class DashboardService:
    """Role landing pages: title, welcome line and navigation links."""

    def __init__(self, records: RecordRepository):
        self._records = records

    def build(self, viewer: ViewerContext) -> Dashboard:
        if viewer.user_type not in _MENUS:
            raise AuthorizationError("Unknown role")

        title, links = _MENUS[viewer.user_type]
        welcome = f"Welcome, {viewer.full_name}!" if viewer.full_name else ""

        if viewer.is_adviser and viewer.grade is not None:
            records = self._records.list_for_grade(viewer.grade)
        else:
            records = self._records.list_all()

        return Dashboard(title=title, welcome=welcome, links=list(links), sanction_count=count_sanctions(records))
