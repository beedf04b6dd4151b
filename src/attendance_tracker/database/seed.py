from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_date, is_business_day
from ..core.constants import DEFAULT_SEED_DAYS
from ..core.enums import Role
from ..users.service import UserService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("John Smith", "john@company.com", Role.EMPLOYEE, "Engineering"),
    ("Jane Doe", "jane@company.com", Role.EMPLOYEE, "Product"),
    ("Bob Wilson", "bob@company.com", Role.EMPLOYEE, "Engineering"),
    ("Alice Brown", "alice@company.com", Role.EMPLOYEE, "Design"),
    ("Charlie Davis", "charlie@company.com", Role.EMPLOYEE, "Marketing"),
    ("Sarah Manager", "manager@company.com", Role.MANAGER, "Management"),
]


def _hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}:00"


def _random_day(rng: random.Random):
    """(check_in, check_out) for one employee-day; (None, None) is an absence."""
    roll = rng.random()
    if roll < 0.70:
        check_in = _hhmm(8 + rng.randrange(2), rng.randrange(30))
        return check_in, _hhmm(17 + rng.randrange(2), rng.randrange(60))
    if roll < 0.85:
        return _hhmm(10 + rng.randrange(2), rng.randrange(60)), "18:00:00"
    if roll < 0.95:
        return "13:00:00", "17:30:00"
    return None, None


def seed_demo_data(
    users: UserService,
    attendance: AttendanceService,
    *,
    today: date,
    days: int = DEFAULT_SEED_DAYS,
    rng: Optional[random.Random] = None,
) -> bool:
    """Demo directory plus ``days`` of weekday history ending today.

    Returns False when the demo users already exist.
    """
    if users.get_user_by_email(DEMO_USERS[-1][1]):
        logger.info("Demo data already present, skipping seed")
        return False

    rng = rng or random.Random(42)
    employee_ids = []
    for name, email, role, department in DEMO_USERS:
        profile = users.register(name=name, email=email, password=DEMO_PASSWORD, role=role, department=department)
        if role == Role.EMPLOYEE:
            employee_ids.append(profile.user_id)

    created = 0
    for days_ago in range(days, -1, -1):
        day = today - timedelta(days=days_ago)
        if not is_business_day(day):
            continue
        for user_id in employee_ids:
            check_in, check_out = _random_day(rng)
            attendance.import_record(user_id, format_date(day), check_in_time=check_in, check_out_time=check_out)
            created += 1

    logger.info("Seeded %s users and %s attendance records", len(DEMO_USERS), created)
    return True
