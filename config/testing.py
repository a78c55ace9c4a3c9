import os

APP_ENV = "testing"
DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_EXPIRY = 3600
SESSION_TIMEOUT = 1800
CSRF_ENABLED = True
CSRF_TOKEN_EXPIRY = 3600

FRONTEND_URL = "http://localhost:3000"
CORS_ALLOWED_ORIGINS = ["http://localhost:3000"]
API_PREFIX = "/api"
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

PDF_PATH = os.getenv("PDF_PATH", "/tmp/payroll-api-test-pdfs")
COMPANY_NAME = "Test Company"
COMPANY_LOGO = ""

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "bm_payroll_test"),
}

AUTO_INIT_DB = False
