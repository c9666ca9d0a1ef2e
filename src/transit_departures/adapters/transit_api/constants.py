"""Constants for the transit API adapter.

Uses the 511.org open transit data API.
API Documentation: https://511.org/open-data/transit

Every request needs an ``api_key`` query parameter.
"""

# API endpoints
TRANSIT_BASE_URL = "https://api.511.org/transit"
STOP_MONITORING_PATH = "StopMonitoring"  # GET /StopMonitoring?agency=...&stopCode=...
STOPS_PATH = "stops"  # GET /stops?operator_id=...
LINES_PATH = "lines"  # GET /lines?operator_id=...

RESPONSE_FORMAT = "json"

# Headers sent with every request
DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# The API sometimes prefixes JSON bodies with a UTF-8 byte-order mark
UTF8_BOM = b"\xef\xbb\xbf"

# Maximum number of departures returned per fetch
MAX_DEPARTURES = 5

# Labels used when a visit does not name its line or destination
FALLBACK_LINE_NAME = "Train"
FALLBACK_DESTINATION = "Unknown"

# Accepted timestamp formats, tried in order (ISO 8601 with and without fractions)
TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

# Fixed-width ISO 8601 shape every timestamp must have before the formats are tried
TIME_PATTERN = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:?\d{2})"
