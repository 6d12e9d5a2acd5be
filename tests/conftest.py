from datetime import date

import httpx
import pytest
from httpx import ASGITransport

from stay_search.services.rate_limiter import RateLimiter

DATA_API_URL = "http://data-api.test"
TODAY = date(2025, 6, 1)


class InMemoryRateLimitStore:
    def __init__(self):
        self.counts: dict[str, int] = {}
        self.expiry: dict[str, int] = {}

    async def get_count(self, key: str) -> int:
        return self.counts.get(key, 0)

    async def increment(self, key: str, expire_at: int) -> int:
        self.counts[key] = self.counts.get(key, 0) + 1
        self.expiry[key] = expire_at
        return self.counts[key]


@pytest.fixture
def rate_limit_store():
    return InMemoryRateLimitStore()


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("DATA_API_URL", DATA_API_URL)
    monkeypatch.setenv("DATA_API_TOKEN", "test-token")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
async def client(mock_env, rate_limit_store):
    from stay_search.dependencies import get_today
    from stay_search.main import app, lifespan

    async with lifespan(app):
        app.state.rate_limiter = RateLimiter(rate_limit_store)
        app.dependency_overrides[get_today] = lambda: TODAY
        try:
            async with httpx.AsyncClient(
                transport=ASGITransport(app=app),
                base_url="http://test",
            ) as c:
                yield c
        finally:
            app.dependency_overrides.clear()
