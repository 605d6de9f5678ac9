"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_CUTOFF = time(8, 15)
DEFAULT_TIMEZONE = "Africa/Dakar"
DEFAULT_CHECKOUT_MIN_GAP_SECONDS = 60
DEFAULT_MAX_DOCUMENT_BYTES = 10 * 1024 * 1024
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_REPORT_DAYS = 30
