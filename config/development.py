import os

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3001")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

OVERTIME_THRESHOLD = float(os.getenv("OVERTIME_THRESHOLD", "40"))
OVERTIME_MULTIPLIER = float(os.getenv("OVERTIME_MULTIPLIER", "1.5"))

# Flat withholding estimates
FEDERAL_TAX_RATE = float(os.getenv("FEDERAL_TAX_RATE", "0.12"))
STATE_TAX_RATE = float(os.getenv("STATE_TAX_RATE", "0.05"))
SOCIAL_SECURITY_RATE = float(os.getenv("SOCIAL_SECURITY_RATE", "0.062"))
MEDICARE_RATE = float(os.getenv("MEDICARE_RATE", "0.0145"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True
