"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LIST_LIMIT = 200
DEFAULT_LATE_GRACE_MINUTES = 5
DEFAULT_HALF_DAY_MINUTES = 240

# date.weekday(): Monday=0 ... Sunday=6
DEFAULT_WEEKLY_OFF_DAYS = (6,)

MONEY_PLACES = 2
EMPLOYEE_HEADER = "X-Employee-Id"
