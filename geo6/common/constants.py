"""Application constants."""

PROVIDER_NAME = "geo6"
USER_AGENT = "geo6-geocoder/1.0 (+https://api.geo6.be/)"
DEFAULT_ENDPOINT_URL = "https://api.geo6.be/"
GEOCODE_ROUTE = "/geocode/getAddressList"
REVERSE_ROUTE = "/latlng"
DEFAULT_COUNTRY_CODE = "BE"
DEFAULT_LIMIT = 5

SUPPORTED_LANGUAGES = ("fr", "nl", "de")

CONSUMER_HEADER = "X-Geo6-Consumer"
TIMESTAMP_HEADER = "X-Geo6-Timestamp"
TOKEN_HEADER = "X-Geo6-Token"

ENV_CLIENT_ID = "GEO6_CUSTOMER_ID"
ENV_PRIVATE_KEY = "GEO6_API_KEY"

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "provider",
    "event",
    "status",
    "route",
    "http_status",
    "duration_ms",
    "result_count",
    "error_code",
    "message",
)
