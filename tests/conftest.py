"""
Test configuration and fixtures for the listing core.
"""
import pytest
from flask import Flask

from listing_core.config import TestingConfig
from listing_core.core import ValidationCore
from listing_core.security.rate_limiting import RateLimiter


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    return RateLimiter(clock=clock)


@pytest.fixture
def test_config():
    return TestingConfig()


@pytest.fixture
def core(test_config, clock):
    return ValidationCore(test_config, limiter=RateLimiter(clock=clock))


# Flask app fixtures
@pytest.fixture
def app():
    """Create a Flask app for testing."""
    app = Flask(__name__)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


# Documents
@pytest.fixture
def valid_cpfs():
    return ['11144477735', '111.444.777-35', '52998224725', '529.982.247-25']


@pytest.fixture
def valid_cnpjs():
    return ['11444777000161', '11.444.777/0001-61', '11222333000181']


# Markers for different test types
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
