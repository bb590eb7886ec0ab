"""Tests for the backend HTTP client."""
from __future__ import annotations

import json

import httpx
import pytest

from storefront.api import FilterOptionsProvider, OrderClient, build_client
from storefront.errors import FetchError, NetworkError
from storefront.models import OrderSubmission

from tests.dummies import mock_client

SUBMISSION = OrderSubmission(customer_name="Customer", items=[("p1", 2)], total_price=100000)


@pytest.mark.asyncio
async def test_get_options_queries_category():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"occasion": ["birthday", "wedding"], "size": ["small", "large"]})

    async with mock_client(handler) as client:
        options = await FilterOptionsProvider(client).get_options("cake")

    assert options == {"occasion": ["birthday", "wedding"], "size": ["small", "large"]}
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/filter-options"
    assert seen[0].url.params["category"] == "cake"


@pytest.mark.asyncio
async def test_get_options_non_success_raises_fetch_error():
    async with mock_client(lambda request: httpx.Response(404, json={"error": "nope"})) as client:
        with pytest.raises(FetchError) as exc_info:
            await FilterOptionsProvider(client).get_options("cake")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [["birthday"], {"occasion": "birthday"}, {"size": [1, 2]}])
async def test_get_options_malformed_payload(body):
    async with mock_client(lambda request: httpx.Response(200, json=body)) as client:
        with pytest.raises(FetchError):
            await FilterOptionsProvider(client).get_options("cake")


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(NetworkError):
            await FilterOptionsProvider(client).get_options("cake")


@pytest.mark.asyncio
async def test_create_order_posts_payload_and_returns_id():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"order_id": 42})

    async with mock_client(handler) as client:
        order_id = await OrderClient(client).create_order(SUBMISSION)

    assert order_id == 42
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/orders"
    assert json.loads(seen[0].content) == {
        "customer_name": "Customer",
        "items": [{"product_id": "p1", "quantity": 2}],
        "total_price": 100000,
        "status": "pending",
    }


@pytest.mark.asyncio
async def test_create_order_server_error():
    async with mock_client(lambda request: httpx.Response(500)) as client:
        with pytest.raises(FetchError) as exc_info:
            await OrderClient(client).create_order(SUBMISSION)

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_create_order_success_without_id_is_failure():
    async with mock_client(lambda request: httpx.Response(200, json={})) as client:
        with pytest.raises(FetchError):
            await OrderClient(client).create_order(SUBMISSION)


@pytest.mark.asyncio
async def test_create_order_non_json_body():
    async with mock_client(lambda request: httpx.Response(200, text="ok")) as client:
        with pytest.raises(FetchError):
            await OrderClient(client).create_order(SUBMISSION)


@pytest.mark.asyncio
async def test_build_client_uses_base_url():
    client = build_client("http://api.example.test")
    try:
        assert client.base_url.host == "api.example.test"
        assert client.timeout.read == 10.0
    finally:
        await client.aclose()


def corrupt_gzip_body(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")


@pytest.mark.asyncio
async def test_get_options_undecodable_body_raises_fetch_error():
    async with mock_client(corrupt_gzip_body) as client:
        with pytest.raises(FetchError):
            await FilterOptionsProvider(client).get_options("cake")


@pytest.mark.asyncio
async def test_create_order_undecodable_body_raises_fetch_error():
    async with mock_client(corrupt_gzip_body) as client:
        with pytest.raises(FetchError):
            await OrderClient(client).create_order(SUBMISSION)
