import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_payroll"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Payroll rules
NORMAL_HOURS_THRESHOLD = float(os.getenv("NORMAL_HOURS_THRESHOLD", "8"))
CURRENCY = os.getenv("CURRENCY", "BRL")

# Retry policy for database and geocoder calls
RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
RETRY_BASE_DELAY = float(os.getenv("RETRY_BASE_DELAY", "0.5"))

# Reverse geocoding
GEOCODER_URL = os.getenv("GEOCODER_URL", "https://nominatim.openstreetmap.org/reverse")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "timesheet-payroll/1.0")
GEOCODE_CACHE_SIZE = int(os.getenv("GEOCODE_CACHE_SIZE", "50"))
GEOCODE_CACHE_TTL = float(os.getenv("GEOCODE_CACHE_TTL", "1800"))
