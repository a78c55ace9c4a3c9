"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_JWT_EXPIRY = 3600
DEFAULT_SESSION_TIMEOUT = 1800
DEFAULT_CSRF_TOKEN_EXPIRY = 3600

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SESSION_ID_KEY = "sid"

CSRF_FIELD_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_EXEMPT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

CORS_MAX_AGE = 86400

PAYSLIP_NO_LENGTH = 9
EMPLOYEE_SEQ_LENGTH = 5

INITIAL_ADMIN_USERNAME = "admin"
INITIAL_ADMIN_PASSWORD = "Admin@123"
