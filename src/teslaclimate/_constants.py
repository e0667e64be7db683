"""Internal constants shared across the library."""

BASE_URL = "https://owner-api.teslamotors.com"
USER_AGENT = "teslaclimate"
DEFAULT_CLIENT_ID = "ownerapi"

#: Status codes that mean the bearer token is no longer accepted.
AUTH_FAILED_STATUS_CODES: frozenset[int] = frozenset({401})
NOT_FOUND_STATUS_CODES: frozenset[int] = frozenset({404})

# ------------------------------------------------------------------
# Climate state cache
# ------------------------------------------------------------------

CLIMATE_CACHE_TTL_SECONDS: float = 30.0
CLIMATE_CACHE_MAX_ENTRIES: int = 100

# ------------------------------------------------------------------
# Temperature bounds (°C)
# ------------------------------------------------------------------

DEFAULT_MIN_TEMP: float = 16.0
DEFAULT_MAX_TEMP: float = 32.0
TARGET_TEMP_STEP: float = 0.5

CURRENT_TEMP_MIN: float = -30.0
CURRENT_TEMP_MAX: float = 45.0
CURRENT_TEMP_STEP: float = 1.0

DEFAULT_HEATING_THRESHOLD: float = 25.0

#: Owner API bearer tokens are issued for 45 days.
DEFAULT_TOKEN_LIFETIME_SECONDS: float = 3_888_000.0
