"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

DEFAULT_BCRYPT_ROUNDS = 10
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31

DEFAULT_BODY_LIMIT = "10kb"

DEFAULT_POOL_NAME = "user_directory_pool"
DEFAULT_POOL_SIZE = 10
# mysql.connector.pooling.CNX_POOL_MAXSIZE
MAX_POOL_SIZE = 32
DEFAULT_CONNECTION_TIMEOUT = 30

API_PREFIX = "/api/v1"

GENERIC_SERVER_ERROR_MESSAGE = "Something went very wrong! Our team has been notified."

# Largest OFFSET a list request may produce.
MAX_PAGE_OFFSET = 2**31 - 1

DEFAULT_RATE_LIMIT = "100 per 15 minutes"
RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
