"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_OVERTIME_THRESHOLD = 40
OVERTIME_MULTIPLIER = 1.5

# Flat-rate withholding estimates, not tax tables.
FEDERAL_TAX_RATE = 0.12
STATE_TAX_RATE = 0.05
SOCIAL_SECURITY_RATE = 0.062
MEDICARE_RATE = 0.0145

DEFAULT_VISIT_MINUTES = 60
DEFAULT_UPCOMING_LIMIT = 10
UPCOMING_SCAN_DAYS = 90
MAX_LOOKAHEAD_DAYS = 3 * 366

DEFAULT_API_TIMEOUT_SECONDS = 10
