DOMAIN = "smartolt"
VERSION = "1.0.0"
MANUFACTURER = "SmartOLT"

# Config entry keys
CONF_ENTRY_NAME = "entry_name"
CONF_BASE_URL = "base_url"
CONF_API_TOKEN = "api_token"
CONF_CENTER_LAT = "center_lat"
CONF_CENTER_LNG = "center_lng"
CONF_ZOOM = "zoom"
CONF_REFRESH_INTERVAL = "refresh_interval"
CONF_MOCK_FALLBACK = "mock_fallback"

# Defaults (Jakarta)
DEFAULT_ENTRY_NAME = "SmartOLT"
DEFAULT_CENTER_LAT = -6.2088
DEFAULT_CENTER_LNG = 106.8456
DEFAULT_ZOOM = 12
DEFAULT_REFRESH_INTERVAL = 30   # seconds; statuses feed has no rate limit
MIN_REFRESH_INTERVAL = 10

# Upstream endpoints
STATUSES_ENDPOINT = "/api/onu/get_onus_statuses"
DETAILS_ENDPOINT = "/api/onu/get_all_onus_details"
ZONES_ENDPOINT = "/api/system/get_zones"
UNCONFIGURED_ENDPOINT = "/api/onu/unconfigured_onus"
GPS_ENDPOINT = "/api/onu/get_all_onus_gps_coordinates"

# Cache keys and lifetimes (seconds).
# Details and GPS are limited to 3 calls/hour upstream; 20 min stays within quota.
DETAILS_CACHE_KEY = "onu_details"
ZONES_CACHE_KEY = "zones"
COORDINATES_CACHE_KEY = "onu_coordinates"
DETAILS_CACHE_TTL = 20 * 60
COORDINATES_CACHE_TTL = 20 * 60
ZONES_CACHE_TTL = 30 * 60

# Per-call deadline, multiplied by the attempt number on each retry
REQUEST_TIMEOUT = 10
REQUEST_ATTEMPTS = 3
# Quota-limited endpoints are never retried
LIMITED_REQUEST_ATTEMPTS = 1

# Synthetic coordinates
KM_PER_DEGREE = 111.32
FALLBACK_RADIUS_KM = 12
MOCK_RADIUS_KM = 15
MOCK_DEVICE_COUNT = 500

# Storage sync service
SERVICE_SYNC = "sync"
STORAGE_VERSION = 1
