"""Unit tests for HTTP utilities.

This module tests the connection pool registry and the retry policy.
"""

import asyncio
from functools import partial
from unittest.mock import patch

import httpx
import pytest

from twitter_ads import Client
from twitter_ads.utils.http import (
    HTTPClientManager,
    Request,
    RetryPolicy,
    create_timeout,
    http_client_manager,
    pool_key,
)
from twitter_ads.utils.http import client_manager


@pytest.fixture
def mock_pool_transport(monkeypatch, recorder):
    """Make pooled clients answer through a MockTransport."""

    def handler(request):
        recorder.append(request)
        return httpx.Response(200, json={"data": {"id": "a1"}})

    factory = partial(httpx.AsyncClient, transport=httpx.MockTransport(handler))
    monkeypatch.setattr(client_manager.httpx, "AsyncClient", factory)


def test_http_client_manager_singleton():
    assert HTTPClientManager() is HTTPClientManager() is http_client_manager


def test_pool_key_uses_values_not_identity():
    t1 = create_timeout(5, 30, 10, 5)
    t2 = create_timeout(5, 30, 10, 5)
    assert pool_key("https://ex.com/", t1) == pool_key("https://ex.com", t2)
    assert pool_key("https://ex.com", t1) != pool_key("https://ex.com", create_timeout(read=10))
    assert pool_key("https://ex.com", t1) != pool_key("https://other.com", t1)


def test_create_timeout_defaults():
    timeout = create_timeout()
    assert timeout.connect == 5.0
    assert timeout.read == 30.0
    assert timeout.write == 10.0
    assert timeout.pool == 5.0


def test_acquire_shares_pool_and_release_counts_holders():
    async def scenario():
        m = HTTPClientManager()
        timeout = create_timeout(read=11.0)
        key, c1 = m.acquire("https://pool.example", timeout)
        _, c2 = m.acquire("https://pool.example", create_timeout(read=11.0))
        assert c1 is c2
        assert m.holders(key) == 2

        await m.release(key, c1)
        assert not c1.is_closed
        assert m.holders(key) == 1

        await m.release(key, c2)
        assert c1.is_closed
        assert m.holders(key) == 0

    asyncio.run(scenario())


def test_acquire_replaces_pool_closed_elsewhere():
    async def scenario():
        m = HTTPClientManager()
        key, stale = m.acquire("https://stale.example", create_timeout())
        await stale.aclose()
        _, fresh = m.acquire("https://stale.example", create_timeout())
        assert fresh is not stale
        assert not fresh.is_closed

        # releasing the stale lease leaves the fresh pool alone
        await m.release(key, stale)
        assert m.holders(key) == 1
        await m.release(key, fresh)
        assert fresh.is_closed

    asyncio.run(scenario())


def test_retry_policy_from_settings(test_settings):
    policy = RetryPolicy.from_settings(test_settings)
    assert policy.max_attempts == 3
    assert policy.delay == 0


def test_retry_policy_succeeds_after_failures():
    calls = {"n": 0}

    async def sometimes():
        calls["n"] += 1
        if calls["n"] < 2:
            raise httpx.ConnectError("boom")
        return 42

    assert asyncio.run(RetryPolicy(delay=0.01, backoff=1.0).run(sometimes)) == 42
    assert calls["n"] == 2


def test_retry_policy_max_attempts():
    calls = {"n": 0}

    async def always_fails():
        calls["n"] += 1
        raise httpx.ReadTimeout("Always fails")

    with pytest.raises(httpx.ReadTimeout, match="Always fails"):
        asyncio.run(RetryPolicy(max_attempts=3, delay=0.0).run(always_fails))
    assert calls["n"] == 3


def test_retry_policy_ignores_other_exceptions():
    calls = {"n": 0}

    async def broken():
        calls["n"] += 1
        raise KeyError("x")

    with pytest.raises(KeyError):
        asyncio.run(RetryPolicy(delay=0.0).run(broken))
    assert calls["n"] == 1


@pytest.mark.parametrize("status,expected", [(429, True), (503, True), (400, False), (404, False)])
def test_retry_policy_status_filter(status, expected):
    request = httpx.Request("GET", "https://ads-api.twitter.com/12/accounts")
    error = httpx.HTTPStatusError(
        "failed", request=request, response=httpx.Response(status, request=request)
    )
    assert RetryPolicy().should_retry(error) is expected


def test_retry_jitter_and_backoff_applied():
    sleeps = []

    async def fake_sleep(d):
        sleeps.append(d)

    calls = {"n": 0}

    async def sometimes():
        calls["n"] += 1
        if calls["n"] < 3:
            raise httpx.ConnectError("boom")
        return 7

    with patch("asyncio.sleep", fake_sleep):
        assert asyncio.run(RetryPolicy(max_attempts=3, delay=1.0, backoff=2.0).run(sometimes)) == 7
    assert len(sleeps) == 2
    assert 0.8 <= sleeps[0] <= 1.2
    assert 1.6 <= sleeps[1] <= 2.4


def test_retry_policy_delays_count():
    assert len(list(RetryPolicy(max_attempts=4).delays())) == 3
    assert list(RetryPolicy(max_attempts=1).delays()) == []


def test_client_uses_pooled_http_client_and_closes_it(test_settings):
    async def scenario():
        client = Client(settings=test_settings)
        first = await client.http_client()
        second = await client.http_client()
        assert first is second
        assert first.timeout.read == test_settings.twitter_ads_timeout
        await client.close()
        assert first.is_closed
        # closing twice is harmless
        await client.close()

    asyncio.run(scenario())


@pytest.mark.asyncio
async def test_closing_one_client_keeps_shared_pool_open(test_settings, mock_pool_transport, recorder):
    first = Client(settings=test_settings)
    second = Client(settings=test_settings)
    await first.http_client()
    shared = await second.http_client()
    assert await first.http_client() is shared

    await first.close()

    assert not shared.is_closed
    result = await Request(second, "get", "/12/accounts/a1").perform()
    assert result.body == {"data": {"id": "a1"}}
    assert len(recorder) == 1

    await second.close()
    assert shared.is_closed


def test_client_leaves_injected_http_client_open(test_settings):
    async def scenario():
        http = httpx.AsyncClient()
        async with Client(settings=test_settings, http_client=http) as client:
            assert await client.http_client() is http
        assert not http.is_closed
        await http.aclose()

    asyncio.run(scenario())


def test_client_url_and_headers(test_settings):
    client = Client(access_token="abc", settings=test_settings)
    assert client.url("/12/accounts") == "https://ads-api.twitter.com/12/accounts"
    assert client.url("12/accounts") == "https://ads-api.twitter.com/12/accounts"
    assert client.headers()["Authorization"] == "Bearer abc"
    assert client.accounts("a1").id == "a1"
    assert client.accounts("a1").client is client
