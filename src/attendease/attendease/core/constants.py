"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ATTENDANCE_THRESHOLD = 75
DEFAULT_SESSION_DAYS = 7
DEFAULT_OTP_EXPIRY_MINUTES = 10
OTP_LENGTH = 6
MIN_PASSWORD_LENGTH = 6

ADMIN_SUBJECT_ID = "admin"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
TEACHING_DAYS = WEEKDAYS[:5]
