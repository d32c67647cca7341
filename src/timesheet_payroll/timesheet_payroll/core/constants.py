"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_NORMAL_HOURS_THRESHOLD = 8.0
HOURS_DISPLAY_DECIMALS = 1
MONEY_DECIMALS = 2

DEFAULT_CURRENCY = "BRL"
CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "$",
    "EUR": "€",
}

DEFAULT_GEOCODE_CACHE_SIZE = 50
DEFAULT_GEOCODE_CACHE_TTL_SECONDS = 30 * 60
GEOCODE_KEY_DECIMALS = 4

EARTH_RADIUS_METERS = 6371000
MAX_ADAPTIVE_RANGE_METERS = 500.0
DEFAULT_GPS_ACCURACY_METERS = 100.0

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY = 0.5
DEFAULT_RETRY_MAX_DELAY = 5.0

DEFAULT_REQUEST_LIST_LIMIT = 200
