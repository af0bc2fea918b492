"""Centralized configuration — all env vars in one place."""

import os

MARKETCHECK_SEARCH_URL = "https://api.marketcheck.com/v2/search/car/active"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3001"))
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "development")

        # CORS. Allow-all stays the default until the allow-list is confirmed.
        # With CORS_ALLOW_ALL on, CORS_ORIGINS is passed through as-is: the
        # default "*" allows every origin, any other value restricts to it.
        # Variables come from the process environment only; no .env loading.
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.cors_allow_all: bool = _env_bool("CORS_ALLOW_ALL", True)

        # Marketcheck
        self.marketcheck_api_key: str | None = os.getenv("MARKETCHECK_API_KEY") or None
        self.marketcheck_base_url: str = os.getenv("MARKETCHECK_BASE_URL", MARKETCHECK_SEARCH_URL)

        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "1800"))
        self.rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "100"))
        self.rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.marketcheck_api_key)

    def validate(self) -> list[str]:
        """Return list of missing env vars needed for vehicle search."""
        missing = []
        if not self.marketcheck_api_key:
            missing.append("MARKETCHECK_API_KEY")
        return missing


settings = Settings()
