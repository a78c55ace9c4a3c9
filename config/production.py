import os

from .config import Config

APP_ENV = "production"
DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")
JWT_EXPIRY = Config.JWT_EXPIRY
SESSION_TIMEOUT = Config.SESSION_TIMEOUT
CSRF_ENABLED = True
CSRF_TOKEN_EXPIRY = Config.CSRF_TOKEN_EXPIRY

FRONTEND_URL = Config.FRONTEND_URL
CORS_ALLOWED_ORIGINS = Config.CORS_ALLOWED_ORIGINS
API_PREFIX = Config.API_PREFIX
DEFAULT_PAGE_SIZE = Config.DEFAULT_PAGE_SIZE
MAX_PAGE_SIZE = Config.MAX_PAGE_SIZE

PDF_PATH = Config.PDF_PATH
COMPANY_NAME = Config.COMPANY_NAME
COMPANY_LOGO = Config.COMPANY_LOGO

DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
