import os
from pathlib import Path

BASE_PATH = Path(__file__).resolve().parents[1]


def _csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me-session-secret"

    # Bearer tokens / sessions / CSRF
    JWT_SECRET = os.environ.get("JWT_SECRET") or "your_strong_secret_key_here_change_in_production"
    JWT_EXPIRY = int(os.environ.get("JWT_EXPIRY", "3600"))
    SESSION_TIMEOUT = int(os.environ.get("SESSION_TIMEOUT", "1800"))
    CSRF_ENABLED = bool(int(os.environ.get("CSRF_ENABLED", "1")))
    CSRF_TOKEN_EXPIRY = int(os.environ.get("CSRF_TOKEN_EXPIRY", "3600"))

    # CORS
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
    CORS_ALLOWED_ORIGINS = _csv(
        os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
        )
    )

    API_PREFIX = os.environ.get("API_PREFIX", "/api")
    DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", "100"))

    # PDF generation
    PDF_PATH = os.environ.get("PDF_PATH", str(BASE_PATH / "pdfs"))
    COMPANY_NAME = os.environ.get("COMPANY_NAME", "Your Company")
    COMPANY_LOGO = os.environ.get("COMPANY_LOGO", str(BASE_PATH / "assets" / "img" / "logo.png"))

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "bm_payroll")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
