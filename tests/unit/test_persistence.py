"""Unit tests for loading, saving and deleting resources."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from twitter_ads import LineItem
from twitter_ads.exceptions import (
    CoercionError,
    MalformedResponseError,
    MissingIdentifierError,
    NotFoundError,
)

SERVER_ITEM = {
    "id": "8u94t",
    "name": "launch",
    "campaign_id": "8slvg",
    "bid_strategy_type": "max",
    "bid_amount_local_micro": 150000,
    "deleted": False,
    "created_at": "2024-04-01T10:00:00Z",
    "updated_at": "2024-04-02T10:00:00Z",
    "servable": True,
}


@pytest.mark.asyncio
async def test_load_populates_from_data(make_client, recorder):
    client = make_client(lambda request: httpx.Response(200, json={"data": SERVER_ITEM}))
    account = client.accounts("18ce54d4x5t")

    item = await LineItem.load(account, "8u94t")

    assert recorder[0].method == "GET"
    assert recorder[0].url.path == "/12/accounts/18ce54d4x5t/line_items/8u94t"
    assert item.account is account
    assert item.id == "8u94t"
    assert item.deleted is False
    assert item.created_at == datetime(2024, 4, 1, 10, tzinfo=timezone.utc)
    assert item.to_payload() == {}


@pytest.mark.asyncio
async def test_account_line_item_shortcut(make_client):
    client = make_client(lambda request: httpx.Response(200, json={"data": SERVER_ITEM}))
    item = await client.accounts("18ce54d4x5t").line_item("8u94t")
    assert isinstance(item, LineItem)
    assert item.name == "launch"


@pytest.mark.asyncio
async def test_save_creates_with_post(make_client, recorder):
    def handler(request):
        sent = json.loads(request.content)
        return httpx.Response(200, json={"data": {**sent, "id": "new1", "deleted": False}})

    account = make_client(handler).accounts("18ce54d4x5t")
    item = LineItem(account)
    item.campaign_id = "8slvg"
    item.name = "launch"
    item.advertiser_user_id = "42"
    item.start_time = datetime(2024, 5, 1, tzinfo=timezone.utc)

    await item.save()

    request = recorder[0]
    assert request.method == "POST"
    assert request.url.path == "/12/accounts/18ce54d4x5t/line_items"
    assert json.loads(request.content) == {
        "campaign_id": "8slvg",
        "name": "launch",
        "start_time": "2024-05-01T00:00:00Z",
    }
    assert item.id == "new1"
    assert item.assigned == frozenset()


@pytest.mark.asyncio
async def test_save_updates_with_put_and_clears_bid(make_client, recorder):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json={"data": SERVER_ITEM})
        return httpx.Response(200, json={"data": {**SERVER_ITEM, "bid_strategy_type": "automatic", "bid_amount_local_micro": None}})

    account = make_client(handler).accounts("18ce54d4x5t")
    item = await LineItem.load(account, "8u94t")
    item.bid_strategy_type = "automatic"
    item.automatically_select_bid = True

    await item.save()

    update = recorder[1]
    assert update.method == "PUT"
    assert update.url.path == "/12/accounts/18ce54d4x5t/line_items/8u94t"
    assert json.loads(update.content) == {
        "bid_strategy_type": "automatic",
        "bid_amount_local_micro": None,
    }
    assert item.bid_amount_local_micro is None
    assert item.to_payload() == {}


@pytest.mark.asyncio
async def test_delete_uses_item_path(make_client, recorder):
    client = make_client(lambda request: httpx.Response(200, json={"data": {**SERVER_ITEM, "deleted": True}}))
    item = LineItem(client.accounts("18ce54d4x5t")).from_response({"id": "8u94t"})

    await item.delete()

    assert recorder[0].method == "DELETE"
    assert recorder[0].url.path == "/12/accounts/18ce54d4x5t/line_items/8u94t"
    assert item.deleted is True


@pytest.mark.asyncio
async def test_delete_without_id_fails_before_request(make_client, recorder):
    account = make_client(lambda request: httpx.Response(200)).accounts("18ce54d4x5t")
    with pytest.raises(MissingIdentifierError):
        await LineItem(account).delete()
    with pytest.raises(MissingIdentifierError):
        await LineItem(account).reload()
    assert recorder == []


@pytest.mark.asyncio
async def test_reload_discards_local_changes(make_client):
    account = make_client(lambda request: httpx.Response(200, json={"data": SERVER_ITEM})).accounts("a")
    item = LineItem(account).from_response({"id": "8u94t"})
    item.name = "local"
    item.objective = "REACH"

    await item.reload()

    assert item.name == "launch"
    assert item.objective is None
    assert item.assigned == frozenset()


@pytest.mark.asyncio
async def test_reload_with_malformed_field_keeps_local_state(make_client):
    broken = dict(SERVER_ITEM, name="renamed", deleted="not-a-bool")
    account = make_client(lambda request: httpx.Response(200, json={"data": broken})).accounts("a")
    item = LineItem(account).from_response({"id": "8u94t", "name": "launch"})
    item.objective = "REACH"

    with pytest.raises(CoercionError):
        await item.reload()

    assert item.name == "launch"
    assert item.objective == "REACH"
    assert item.assigned == frozenset({"objective"})
    assert item.bid_amount_local_micro is None


@pytest.mark.asyncio
async def test_load_not_found(make_client):
    account = make_client(lambda request: httpx.Response(404, json={"errors": []})).accounts("a")
    with pytest.raises(NotFoundError):
        await LineItem.load(account, "missing")


@pytest.mark.asyncio
async def test_load_without_data_object(make_client):
    account = make_client(lambda request: httpx.Response(200, json={"data": []})).accounts("a")
    with pytest.raises(MalformedResponseError) as exc_info:
        await LineItem.load(account, "8u94t")
    assert exc_info.value.data_path == "data"
