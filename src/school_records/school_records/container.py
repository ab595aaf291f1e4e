from __future__ import annotations

from dataclasses import dataclass

from .classes.mysql_class_repository import MySQLClassRepository
from .classes.service import ClassService
from .dashboards.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .records.mysql_record_repository import MySQLRecordRepository
from .records.service import RecordOverviewService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    class_service: ClassService
    record_service: RecordOverviewService
    dashboard_service: DashboardService


def build_services(*, users_repo, classes_repo, records_repo) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    class_service = ClassService(classes_repo)
    return Container(
        auth_service=AuthService(users_repo),
        class_service=class_service,
        record_service=RecordOverviewService(records_repo, class_service),
        dashboard_service=DashboardService(records_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        records_repo=MySQLRecordRepository(conn),
    )
