"""Shared connection pools for SDK clients.

Every :class:`~twitter_ads.client.Client` that is not given its own
``httpx.AsyncClient`` leases one from :data:`http_client_manager`.
Clients pointed at the same base URL with the same timeouts hold the
same lease, and the pooled ``httpx.AsyncClient`` is closed only when its
last holder releases it.
"""

import logging
from typing import Dict, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

PoolKey = Tuple[str, Tuple[Optional[float], ...]]

DEFAULT_LIMITS = httpx.Limits(
    max_keepalive_connections=10,
    max_connections=20,
    keepalive_expiry=30.0,
)


def create_timeout(
    connect: float = 5.0,
    read: float = 30.0,
    write: float = 10.0,
    pool: float = 5.0,
) -> httpx.Timeout:
    """Create a timeout configuration object.

    :param connect: Connection timeout in seconds
    :type connect: float
    :param read: Read timeout in seconds
    :type read: float
    :param write: Write timeout in seconds
    :type write: float
    :param pool: Pool timeout in seconds
    :type pool: float
    :return: Configured timeout object
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(connect=connect, read=read, write=write, pool=pool)


def pool_key(base_url: str, timeout: httpx.Timeout) -> PoolKey:
    """Identify a pool by host and timeout values, not object identity."""
    return (
        base_url.rstrip("/"),
        (timeout.connect, timeout.read, timeout.write, timeout.pool),
    )


class _Lease:
    __slots__ = ("http", "holders")

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self.holders = 0


class HTTPClientManager:
    """Reference-counted registry of pooled ``httpx.AsyncClient`` instances.

    A single instance exists per process. :meth:`acquire` and
    :meth:`release` must be paired; :class:`~twitter_ads.client.Client`
    does this in ``http_client()`` and ``close()``.
    """

    _instance: Optional["HTTPClientManager"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "_leases"):
            self._leases: Dict[PoolKey, _Lease] = {}

    def holders(self, key: PoolKey) -> int:
        """Number of clients currently holding the pool for ``key``."""
        lease = self._leases.get(key)
        return lease.holders if lease else 0

    def acquire(
        self, base_url: str, timeout: httpx.Timeout
    ) -> Tuple[PoolKey, httpx.AsyncClient]:
        """Lease the pooled client for ``base_url`` and ``timeout``.

        :param base_url: API base URL the caller sends requests to
        :type base_url: str
        :param timeout: Timeouts for the pooled client
        :type timeout: httpx.Timeout
        :return: The pool key to release later and the leased client
        :rtype: Tuple[PoolKey, httpx.AsyncClient]
        """
        key = pool_key(base_url, timeout)
        lease = self._leases.get(key)
        if lease is None or lease.http.is_closed:
            lease = _Lease(
                httpx.AsyncClient(
                    timeout=timeout, limits=DEFAULT_LIMITS, follow_redirects=True
                )
            )
            self._leases[key] = lease
            logger.debug("Opened HTTP connection pool for %s", key[0])
        lease.holders += 1
        return key, lease.http

    async def release(self, key: PoolKey, http: httpx.AsyncClient) -> None:
        """Give back a lease, closing the pool once nobody holds it.

        Releasing a client that was already replaced in the registry
        leaves the current pool untouched.
        """
        lease = self._leases.get(key)
        if lease is None or lease.http is not http:
            return
        lease.holders -= 1
        if lease.holders > 0:
            return
        del self._leases[key]
        await http.aclose()
        logger.debug("Closed HTTP connection pool for %s", key[0])


http_client_manager = HTTPClientManager()
