from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from types import ModuleType
from typing import Optional

from .core import constants


@dataclass(frozen=True)
class AppSettings:
    """Process-wide configuration, read once at application start."""

    secret_key: str
    jwt_secret: str
    jwt_expiry: int = constants.DEFAULT_JWT_EXPIRY
    session_timeout: int = constants.DEFAULT_SESSION_TIMEOUT
    csrf_enabled: bool = True
    csrf_token_expiry: int = constants.DEFAULT_CSRF_TOKEN_EXPIRY
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    frontend_url: str = "http://localhost:3000"
    cors_allowed_origins: tuple = ()
    api_prefix: str = "/api"
    default_page_size: int = constants.DEFAULT_PAGE_SIZE
    max_page_size: int = constants.MAX_PAGE_SIZE
    pdf_path: str = "pdfs"
    company_name: str = "Your Company"
    company_logo: str = ""
    db_config: dict = field(default_factory=dict)
    auto_init_db: bool = False

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AppSettings":
        return cls(
            secret_key=getattr(settings, "SECRET_KEY"),
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expiry=int(getattr(settings, "JWT_EXPIRY", constants.DEFAULT_JWT_EXPIRY)),
            session_timeout=int(getattr(settings, "SESSION_TIMEOUT", constants.DEFAULT_SESSION_TIMEOUT)),
            csrf_enabled=bool(getattr(settings, "CSRF_ENABLED", True)),
            csrf_token_expiry=int(getattr(settings, "CSRF_TOKEN_EXPIRY", constants.DEFAULT_CSRF_TOKEN_EXPIRY)),
            app_env=str(getattr(settings, "APP_ENV", "development")),
            debug=bool(getattr(settings, "DEBUG", False)),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
            frontend_url=str(getattr(settings, "FRONTEND_URL", "http://localhost:3000")),
            cors_allowed_origins=tuple(getattr(settings, "CORS_ALLOWED_ORIGINS", ())),
            api_prefix=str(getattr(settings, "API_PREFIX", "/api")).rstrip("/"),
            default_page_size=int(getattr(settings, "DEFAULT_PAGE_SIZE", constants.DEFAULT_PAGE_SIZE)),
            max_page_size=int(getattr(settings, "MAX_PAGE_SIZE", constants.MAX_PAGE_SIZE)),
            pdf_path=str(getattr(settings, "PDF_PATH", "pdfs")),
            company_name=str(getattr(settings, "COMPANY_NAME", "Your Company")),
            company_logo=str(getattr(settings, "COMPANY_LOGO", "") or ""),
            db_config=dict(getattr(settings, "DB_CONFIG", {})),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )


def load_settings(module_name: Optional[str] = None) -> AppSettings:
    if module_name is None:
        from config import get_settings_module

        module_name = get_settings_module()
    return AppSettings.from_module(importlib.import_module(module_name))
