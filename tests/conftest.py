"""Shared test fixtures — fake clock, fresh cache store, app wired to a fake backend."""

import os

import pytest

# Set required env vars before any gateway imports
os.environ.setdefault("SCRAPERAPI_KEY", "test-scraper-key")
os.environ.setdefault("CACHE_SWEEP_INTERVAL_S", "0")

from fastapi.testclient import TestClient  # noqa: E402

from gateway.core.cache import CacheStore  # noqa: E402
from gateway.core.ratelimit import build_limiter  # noqa: E402
from gateway.main import create_app  # noqa: E402


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBackend:
    """Replaces scraperapi.fetch; records every call it receives."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.payload = {"name": "Widget", "price": "$9.99"}
        self.error: Exception | None = None

    async def fetch(self, target: str, api_key: str, client=None):
        self.calls.append((target, api_key))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return CacheStore(capacity=100, default_ttl=300, clock=clock)


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()
    monkeypatch.setattr("gateway.scrapers.scraperapi.fetch", fake.fetch)
    return fake


@pytest.fixture
def app(store):
    return create_app(store=store, limiter=build_limiter(enabled=False))


@pytest.fixture
def client(app, backend):
    return TestClient(app)
