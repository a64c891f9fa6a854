"""Enumerations for values accepted by the Ads API.

Members are ``str`` subclasses so they compare equal to the raw wire
values and serialize to JSON without conversion.
"""

from enum import Enum


class Product(str, Enum):
    """Product types that a line item can promote."""

    PROMOTED_ACCOUNT = "PROMOTED_ACCOUNT"
    PROMOTED_TWEETS = "PROMOTED_TWEETS"


class Placement(str, Enum):
    """Surfaces on which a line item can be served."""

    ALL_ON_TWITTER = "ALL_ON_TWITTER"
    PUBLISHER_NETWORK = "PUBLISHER_NETWORK"
    TAP_BANNER = "TAP_BANNER"
    TAP_FULL = "TAP_FULL"
    TAP_FULL_LANDSCAPE = "TAP_FULL_LANDSCAPE"
    TAP_NATIVE = "TAP_NATIVE"
    TWITTER_PROFILE = "TWITTER_PROFILE"
    TWITTER_REPLIES = "TWITTER_REPLIES"
    TWITTER_SEARCH = "TWITTER_SEARCH"
    TWITTER_TIMELINE = "TWITTER_TIMELINE"


class BidStrategyType(str, Enum):
    """Bidding strategies for a line item.

    ``AUTOMATIC`` lets the platform choose the bid, so an explicit bid
    amount has to be cleared when switching an existing line item to it.
    """

    AUTOMATIC = "automatic"
    MAX = "max"
    TARGET = "target"


def wire_value(value):
    """Return the raw wire value for enum members, other values unchanged."""
    if isinstance(value, Enum):
        return value.value
    return value
