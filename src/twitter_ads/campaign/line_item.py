"""Line item resource.

A line item belongs to a campaign and carries the bidding, budget,
scheduling and placement settings used to serve promoted content.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .. import API_VERSION
from ..enums import BidStrategyType, Product, wire_value
from ..exceptions import MalformedResponseError
from ..resource import PropertyType, Resource, ResourcePaths, SchemaBuilder
from ..utils.http import Request

if TYPE_CHECKING:
    from ..client import Client

logger = logging.getLogger(__name__)


def drop_automatic_bid_selection(item: Resource, payload: Dict[str, Any]) -> Dict[str, Any]:
    """The server rejects automatically_select_bid alongside bid_strategy_type."""
    if "bid_strategy_type" not in payload:
        return payload
    return {k: v for k, v in payload.items() if k != "automatically_select_bid"}


def clear_bid_amount_for_automatic_strategy(
    item: Resource, payload: Dict[str, Any]
) -> Dict[str, Any]:
    """Send an explicit null bid when an existing line item switches to automatic.

    Omitting ``bid_amount_local_micro`` leaves the stored bid in place;
    only ``null`` clears it. Creates never carry a bid to clear, so the
    rule is limited to instances with a server-assigned ``id``.
    """
    if payload.get("bid_strategy_type") != BidStrategyType.AUTOMATIC:
        return payload
    if not item.is_set("id") or item.get("id") is None:
        return payload
    return {**payload, "bid_amount_local_micro": None}


def drop_beta_advertiser_user_id(item: Resource, payload: Dict[str, Any]) -> Dict[str, Any]:
    """advertiser_user_id is beta-only and fails for accounts not enrolled."""
    return {k: v for k, v in payload.items() if k != "advertiser_user_id"}


def extract_placements(body: Any, path: str) -> List[Any]:
    """Return ``body["data"][0]["placements"]``.

    :raises MalformedResponseError: If any level of the structure is missing
    """
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list) or not data:
        raise MalformedResponseError(
            "expected a non-empty list under 'data'", path=path, data_path="data"
        )
    first = data[0]
    if not isinstance(first, dict) or "placements" not in first:
        raise MalformedResponseError(
            "expected 'placements' in the first data entry",
            path=path,
            data_path="data[0].placements",
        )
    placements = first["placements"]
    if not isinstance(placements, list):
        raise MalformedResponseError(
            f"expected a list of placements, got {type(placements).__name__}",
            path=path,
            data_path="data[0].placements",
        )
    return placements


class LineItem(Resource):
    """Line item within a campaign.

    Example:
        >>> item = LineItem(account)
        >>> item.campaign_id = "8slvg"
        >>> item.bid_strategy_type = BidStrategyType.AUTOMATIC
        >>> await item.save()
    """

    schema = (
        SchemaBuilder()
        .declare("id", read_only=True)
        .declare("deleted", type=PropertyType.BOOLEAN, read_only=True)
        .declare("created_at", type=PropertyType.TIMESTAMP, read_only=True)
        .declare("updated_at", type=PropertyType.TIMESTAMP, read_only=True)
        .declare("advertiser_domain")
        .declare("automatically_select_bid", type=PropertyType.BOOLEAN)
        .declare("bid_amount_local_micro")
        .declare("bid_strategy_type")
        .declare("bid_unit")
        .declare("campaign_id")
        .declare("categories")
        .declare("charge_by")
        .declare("end_time", type=PropertyType.TIMESTAMP)
        .declare("entity_status")
        .declare("include_sentiment")
        .declare("name")
        .declare("objective")
        .declare("optimization")
        .declare("pay_by")
        .declare("placements")
        .declare("primary_web_event_tag")
        .declare("product_type")
        .declare("start_time", type=PropertyType.TIMESTAMP)
        .declare("target_cpa_local_micro")
        .declare("total_budget_amount_local_micro")
        # beta (not yet generally available)
        .declare("advertiser_user_id")
        .declare("tracking_tags")
        .declare("lookalike_expansion")
        # client side only
        .declare("to_delete", type=PropertyType.BOOLEAN)
        .build()
    )

    paths = ResourcePaths(
        collection=f"/{API_VERSION}/accounts/{{account_id}}/line_items",
        item=f"/{API_VERSION}/accounts/{{account_id}}/line_items/{{id}}",
        batch=f"/{API_VERSION}/batch/accounts/{{account_id}}/line_items",
        extra={"placements": f"/{API_VERSION}/line_items/placements"},
    )

    # order matters: later rules see the output of earlier ones
    payload_rules = (
        drop_automatic_bid_selection,
        clear_bid_amount_for_automatic_strategy,
        drop_beta_advertiser_user_id,
    )

    @classmethod
    async def lookup_placements(
        cls,
        client: "Client",
        product_type: Optional[Union[Product, str]] = None,
    ) -> List[Any]:
        """Return the valid placement combinations, optionally for one product.

        Example:
            >>> await LineItem.lookup_placements(client, Product.PROMOTED_TWEETS)
            [['ALL_ON_TWITTER'], ['TWITTER_SEARCH'], ...]

        :param client: Client used to issue the request
        :type client: Client
        :param product_type: Product to restrict the lookup to
        :type product_type: Optional[Union[Product, str]]
        :return: Placement combinations as returned by the API
        :rtype: List[Any]
        :raises MalformedResponseError: If the response lacks ``data[0].placements``
        """
        params = None
        if product_type is not None:
            params = {"product_type": wire_value(product_type)}
        path = cls.paths.resolve("placements")
        response = await Request(client, "get", path, params=params).perform()
        placements = extract_placements(response.body, path)
        logger.debug(f"Fetched {len(placements)} placement combination(s)")
        return placements
