import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set environment variables read by Settings during tests."""
    monkeypatch.setenv("TWITTER_ADS_ACCESS_TOKEN", "test-token")
    monkeypatch.setenv("TWITTER_ADS_SANDBOX", "false")
    monkeypatch.setenv("TWITTER_ADS_RETRY_DELAY", "0")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    yield


@pytest.fixture
def test_settings():
    """Settings with retries that do not sleep."""
    from twitter_ads.config import Settings

    return Settings(
        twitter_ads_access_token="test-token",
        twitter_ads_max_retries=3,
        twitter_ads_retry_delay=0,
    )


@pytest.fixture
def recorder():
    """Collects requests seen by a MockTransport handler."""
    return []


@pytest.fixture
def make_client(test_settings, recorder):
    """Build a Client whose transport is answered by ``handler``.

    ``handler`` receives the ``httpx.Request`` and returns an
    ``httpx.Response``; every request is also appended to ``recorder``.
    """
    from twitter_ads import Client

    def _make(handler):
        def _record(request):
            recorder.append(request)
            return handler(request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return Client(settings=test_settings, http_client=http)

    return _make


@pytest.fixture
def account(make_client):
    """Account bound to a client that must not be called."""

    def _unexpected(request):
        raise AssertionError(f"unexpected request {request.method} {request.url}")

    return make_client(_unexpected).accounts("18ce54d4x5t")
