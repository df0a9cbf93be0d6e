"""Constants used throughout the notification hub."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # Log requests slower than 1 second

# Message header carrying the number of retries already scheduled
RETRY_COUNT_HEADER = "x-retry-count"

# Delivery defaults (overridable through settings)
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY_SECONDS = 1.0
DEFAULT_CONSUMER_PREFETCH = 3

# Pagination bounds
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
