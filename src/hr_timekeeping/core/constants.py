"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta

GENESIS_HASH = "GENESIS"

# Ledger append rules
MAX_EVENT_GAP = timedelta(hours=24)

# Attendance rules
MAX_WORK_SPAN = timedelta(hours=12)
MAX_SINGLE_BREAK = timedelta(minutes=30)
MIN_EVENTS_PER_DAY = 2

# Auditor rules
MAX_DAILY_BREAK_MINUTES = 240

# Overtime thresholds (hours)
DAILY_REGULAR_HOURS = 8
WEEKLY_REGULAR_HOURS = 40

DEFAULT_HISTORY_LIMIT = 100
MAX_HISTORY_LIMIT = 1000
DEFAULT_ATTENDANCE_LIMIT = 100
SCAN_BATCH_SIZE = 500

DECRYPTION_ERROR = "DECRYPTION_ERROR"
