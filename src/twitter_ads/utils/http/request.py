"""Request execution against the Ads API.

:class:`Request` is the single seam through which every SDK call reaches
the network. It resolves the URL against the client's base URL, attaches
the client's headers, retries transient failures and maps unsuccessful
responses onto the SDK's exception hierarchy. :class:`Response` exposes
the decoded JSON body.
"""

import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from ...exceptions import APIError, MalformedResponseError, NotFoundError, RateLimitError
from .retry import RetryPolicy

if TYPE_CHECKING:
    from ...client import Client

logger = logging.getLogger(__name__)


class Response:
    """Decoded response of an Ads API request.

    :param status_code: HTTP status code
    :type status_code: int
    :param headers: Response headers
    :type headers: httpx.Headers
    :param body: Decoded JSON body, ``None`` when the body is empty
    :type body: Any
    """

    def __init__(self, status_code: int, headers: httpx.Headers, body: Any):
        self.status_code = status_code
        self.headers = headers
        self.body = body

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "Response":
        """Decode an ``httpx.Response``.

        :raises MalformedResponseError: If the body is not valid JSON
        """
        body = None
        if response.content:
            try:
                body = response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise MalformedResponseError(
                    f"response body is not valid JSON: {e}",
                    path=response.request.url.path,
                ) from e
        return cls(response.status_code, response.headers, body)

    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code})"


def _retry_after(response: httpx.Response) -> Optional[int]:
    for header in ("retry-after", "x-rate-limit-reset"):
        value = response.headers.get(header)
        if value and value.isdigit():
            return int(value)
    return None


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def raise_for_response(response: httpx.Response) -> None:
    """Map an unsuccessful ``httpx.Response`` to an SDK exception.

    :raises RateLimitError: On HTTP 429
    :raises NotFoundError: On HTTP 404
    :raises APIError: On any other non-2xx status
    """
    if response.is_success:
        return
    body = _error_body(response)
    path = response.request.url.path
    message = f"{response.request.method} {path} failed with HTTP {response.status_code}"
    if response.status_code == 429:
        raise RateLimitError(message, retry_after=_retry_after(response), response_body=body)
    if response.status_code == 404:
        raise NotFoundError(message, response_body=body)
    raise APIError(message, status_code=response.status_code, response_body=body)


class Request:
    """A single Ads API call.

    Example:
        >>> response = await Request(client, "get", "/12/accounts").perform()
        >>> response.body["data"]

    :param client: SDK client providing the transport and headers
    :type client: Client
    :param method: HTTP method, case-insensitive
    :type method: str
    :param path: Resolved resource path
    :type path: str
    :param params: Optional query parameters
    :type params: Optional[Dict[str, Any]]
    :param body: Optional JSON body
    :type body: Optional[Dict[str, Any]]
    """

    def __init__(
        self,
        client: "Client",
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ):
        self.client = client
        self.method = method.upper()
        self.path = path
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f"Request({self.method} {self.path})"

    async def perform(self) -> Response:
        """Execute the request with retries and return the decoded response.

        :return: Decoded response
        :rtype: Response
        :raises APIError: If the API answers with a non-2xx status
        :raises MalformedResponseError: If the body cannot be decoded
        :raises httpx.TransportError: If the network fails on every attempt
        """
        policy = RetryPolicy.from_settings(self.client.settings)
        try:
            response = await policy.run(self._send, label=repr(self))
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self.method} {self.path} -> {e.response.status_code}")
            raise_for_response(e.response)
            raise
        return Response.from_httpx(response)

    async def _send(self) -> httpx.Response:
        http = await self.client.http_client()
        kwargs: Dict[str, Any] = {"headers": self.client.headers()}
        if self.params:
            kwargs["params"] = self.params
        if self.body is not None:
            kwargs["json"] = self.body

        logger.debug(f"=== SEND: {self.method} {self.path} params={self.params}")
        response = await http.request(self.method, self.client.url(self.path), **kwargs)
        logger.debug(f"{self.method} {self.path} -> {response.status_code}")
        response.raise_for_status()
        return response
