"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
MONTH_FORMAT = "%Y-%m"

# Check-in cut-offs, minutes since midnight (inclusive upper bounds).
PRESENT_CUTOFF_MINUTES = 9 * 60 + 30
LATE_CUTOFF_MINUTES = 12 * 60

# Worked hours below this downgrade the day to half-day on checkout.
HALF_DAY_THRESHOLD_HOURS = 4

DEFAULT_SESSION_DAYS = 1
DEFAULT_TREND_DAYS = 7
DEFAULT_RECENT_DAYS = 7
DEFAULT_SEED_DAYS = 30

EMPLOYEE_CODE_PREFIX = "EMP"
ALL_EMPLOYEES = "all"
