from __future__ import annotations

from enum import Enum, IntEnum


class UserType(IntEnum):
    """Role discriminator stored on users and in the session."""

    ADMIN = 1
    PRINCIPAL = 2
    ADVISER = 3


class MonitoredCategory(str, Enum):
    """Fixed classification of a monitored record, in table column order."""

    ABSENT = "Absent"
    TARDY = "Tardy"
    CUTTING_CLASSES = "Cutting Classes"
    IMPROPER_UNIFORM = "Improper Uniform"
    OFFENSE = "Offense"
    MISBEHAVIOR = "Misbehavior"
    CLINIC = "Clinic"
