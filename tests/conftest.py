import os

# Keep test runs off the rotating log file
os.environ.setdefault("LOG_FILE_PATH", "")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from focusguard.core.security import (
    RateLimiter,
    SecurityPolicy,
    ValidationFacade,
    get_validation_facade,
)


class FakeClock:
    """Manually advanced clock for the sliding window."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def policy():
    return SecurityPolicy(app_origin="https://focus.example.com")


@pytest.fixture
def limiter(policy, clock):
    return RateLimiter(limit=policy.rate_limit, window=policy.rate_window, clock=clock)


@pytest.fixture
def facade(policy, limiter):
    return ValidationFacade(policy=policy, rate_limiter=limiter)


@pytest.fixture
def client(facade):
    from focusguard.main import app

    app.dependency_overrides[get_validation_facade] = lambda: facade
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
