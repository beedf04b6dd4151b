from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Derived daily status stored on an attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class AbsencePolicy(str, Enum):
    """How a metric treats employees with no record for a day.

    EXPLICIT_ONLY counts only records whose status is ``absent``.
    FOLD_MISSING also counts every employee that has no record at all.
    """

    EXPLICIT_ONLY = "explicit_only"
    FOLD_MISSING = "fold_missing"
