import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from config import Settings  # noqa: E402


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMarketcheck:
    """Records upstream requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, json_body=None, text: str | None = None):
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(monkeypatch):
    for var in ("MARKETCHECK_API_KEY", "MARKETCHECK_BASE_URL", "CACHE_TTL_SECONDS", "CORS_ALLOW_ALL"):
        monkeypatch.delenv(var, raising=False)
    app_settings = Settings()
    app_settings.marketcheck_api_key = "test-key"
    return app_settings


@pytest.fixture
def camry_listings():
    return {"listings": [{"id": 1}], "num_found": 1}


@pytest.fixture
def fake_marketcheck():
    """Factory for a fake Marketcheck upstream."""
    return FakeMarketcheck
