"""HTTP utilities public API.

This package provides:
- Reference-counted connection pools shared by SDK clients
- Retry policy with jittered backoff
- Request executor and decoded response wrapper

Recommended import pattern for consumers:
    from twitter_ads.utils.http import Request, Response
"""

from .client_manager import (
    HTTPClientManager,
    create_timeout,
    http_client_manager,
    pool_key,
)
from .request import Request, Response, raise_for_response
from .retry import RETRYABLE_STATUS_CODES, RetryPolicy

__all__ = [
    "HTTPClientManager",
    "http_client_manager",
    "pool_key",
    "create_timeout",
    "RetryPolicy",
    "RETRYABLE_STATUS_CODES",
    "Request",
    "Response",
    "raise_for_response",
]
