"""Twitter Ads API client SDK.

This package provides typed resource definitions for the Twitter Ads
API, including a declarative property schema, request payload
serialization, REST path resolution and an async request executor.

:var __version__: Current package version
:type __version__: str
:var API_VERSION: Ads API version prefix shared by every resource path
:type API_VERSION: str
"""

__version__ = "0.1.0"

API_VERSION = "12"

from .account import Account  # noqa: E402
from .client import Client  # noqa: E402
from .campaign import LineItem  # noqa: E402
from .enums import BidStrategyType, Placement, Product  # noqa: E402

__all__ = [
    "API_VERSION",
    "Account",
    "BidStrategyType",
    "Client",
    "LineItem",
    "Placement",
    "Product",
    "__version__",
]
