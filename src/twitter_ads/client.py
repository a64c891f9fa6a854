"""Ads API client.

The :class:`Client` holds everything a request needs that is not part of
a resource: configuration, credentials, default headers and the
underlying ``httpx.AsyncClient``.
"""

import logging
from typing import Dict, Optional

import httpx

from . import __version__
from .account import Account
from .config.settings import Settings, settings as default_settings
from .utils.http.client_manager import PoolKey, create_timeout, http_client_manager

logger = logging.getLogger(__name__)


class Client:
    """Entry point for talking to the Ads API.

    Example:
        >>> async with Client(access_token="...") as client:
        ...     account = client.accounts("18ce54d4x5t")

    :param access_token: Bearer token, defaults to ``settings.twitter_ads_access_token``
    :type access_token: Optional[str]
    :param settings: Settings to use instead of the global instance
    :type settings: Optional[Settings]
    :param http_client: Pre-built ``httpx.AsyncClient``; when omitted a
                        pooled client is obtained from the client manager
    :type http_client: Optional[httpx.AsyncClient]
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or default_settings
        self.access_token = access_token or self.settings.twitter_ads_access_token
        self.base_url = self.settings.twitter_ads_api_base_url.rstrip("/")
        self._http_client = http_client
        self._pool_key: Optional[PoolKey] = None

    def __repr__(self) -> str:
        return f"Client(base_url={self.base_url!r})"

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "Accept": "application/json",
            "User-Agent": f"twitter-ads-python/{__version__}",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def url(self, path: str) -> str:
        """Absolute URL for a resource path."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def http_client(self) -> httpx.AsyncClient:
        """Return the transport client, leasing a pooled one on first use."""
        if self._http_client is None:
            self._pool_key, self._http_client = http_client_manager.acquire(
                self.base_url,
                create_timeout(read=self.settings.twitter_ads_timeout),
            )
            logger.debug(f"Using pooled HTTP client for {self.base_url}")
        return self._http_client

    async def close(self) -> None:
        """Release this client's pool lease; an injected client is left open.

        The pooled connections stay open while other clients hold them.
        """
        if self._pool_key is None:
            return
        key, http = self._pool_key, self._http_client
        self._pool_key = self._http_client = None
        await http_client_manager.release(key, http)

    def accounts(self, id: str) -> Account:
        """Return an :class:`Account` context bound to this client.

        No request is made; the account is only used for path
        interpolation and as the owner of resources.
        """
        return Account(self, id)
