"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

GRADE_LEVELS = (7, 8, 9, 10)
DAYS_PER_WEEK = 7
MAX_WEEK_OF_MONTH = 5
DEFAULT_SESSION_DAYS = 7

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
