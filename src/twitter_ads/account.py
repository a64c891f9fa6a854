"""Ads account context."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .campaign.line_item import LineItem
    from .client import Client


class Account:
    """An advertising account that owns resources.

    Resources keep a reference to their account for path interpolation
    (``account.id``) and for issuing requests (``account.client``). The
    account outlives the resources bound to it.

    :param client: Client used for requests on behalf of this account
    :type client: Client
    :param id: Account identifier
    :type id: str
    """

    def __init__(self, client: "Client", id: str):
        self.client = client
        self.id = id

    def __repr__(self) -> str:
        return f"Account(id={self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.id == other.id and self.client is other.client

    def __hash__(self) -> int:
        return hash((self.id, id(self.client)))

    async def line_item(self, id: str) -> "LineItem":
        """Load a single line item belonging to this account."""
        from .campaign.line_item import LineItem

        return await LineItem.load(self, id)
