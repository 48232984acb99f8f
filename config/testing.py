API_BASE_URL = "http://api.test"
API_TIMEOUT_SECONDS = 1.0

OVERTIME_THRESHOLD = 40.0
OVERTIME_MULTIPLIER = 1.5

FEDERAL_TAX_RATE = 0.12
STATE_TAX_RATE = 0.05
SOCIAL_SECURITY_RATE = 0.062
MEDICARE_RATE = 0.0145

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True
