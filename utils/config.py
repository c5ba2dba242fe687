"""Application configuration for the Technicians Business app.

All settings come from environment variables with defaults, so the app works
out of the box without any configuration. Tests build an AppConfig directly
and pass it to ``create_app(config=...)``.
"""

import os as _os
from pathlib import Path
from typing import Any


def _split_csv(raw: str) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]


class AppConfig:
    """Application-level configuration loaded from environment variables.

    Environment variables:
        APP_HOST: Server bind address (default: 127.0.0.1)
        APP_PORT: Server port (default: 8000)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        APP_ADMIN_USERS: Comma-separated usernames with edit rights (default: admin)
        APP_READONLY_USERS: Comma-separated read-only usernames (default: viewer)
        APP_LOGIN_PASSWORD: Shared sign-in password (default: admin)
        APP_SESSION_MAX_AGE: Session cookie lifetime in seconds (default: 3600)
        APP_SEED_PATH: Optional JSON file with seed records (default: built-in sample)
        APP_CHART_CACHE_TTL: Seconds analytics results stay cached (default: 60)
        RATE_LIMIT_LOGIN: Max sign-in attempts per minute per IP (default: 10)
        RATE_LIMIT_DEFAULT: Max requests per minute for other paths (default: 120)
        TRUSTED_PROXIES: Comma-separated proxy IP addresses to trust for forwarded IPs
    """

    def __init__(self) -> None:
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*" else _split_csv(raw_origins)
        )
        self.admin_users: list[str] = _split_csv(_os.getenv("APP_ADMIN_USERS", "admin"))
        self.readonly_users: list[str] = _split_csv(_os.getenv("APP_READONLY_USERS", "viewer"))
        self.login_password = _os.getenv("APP_LOGIN_PASSWORD", "admin")
        self.session_max_age = int(_os.getenv("APP_SESSION_MAX_AGE", "3600"))
        raw_seed = _os.getenv("APP_SEED_PATH", "")
        self.seed_path: Path | None = Path(raw_seed) if raw_seed else None
        self.chart_cache_ttl = float(_os.getenv("APP_CHART_CACHE_TTL", "60"))
        self.rate_limit_login = int(_os.getenv("RATE_LIMIT_LOGIN", "10"))
        self.rate_limit_default = int(_os.getenv("RATE_LIMIT_DEFAULT", "120"))
        raw_proxies = _os.getenv("TRUSTED_PROXIES", "")
        self.trusted_proxies: set[str] = set(_split_csv(raw_proxies))

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Settings as a dict, with the shared password masked."""
        data = {k: v for k, v in self.__dict__.items() if not k.startswith("_")}
        data["login_password"] = "***"
        return data
