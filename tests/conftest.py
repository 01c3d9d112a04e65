"""Pytest fixtures for the draft order gateway tests."""

import asyncio
import copy

import httpx
import pytest
from fastapi.testclient import TestClient

from draft_order_gateway.api.endpoints import draft_orders
from draft_order_gateway.api.main import app
from draft_order_gateway.integrations.clients.real_http.shopify_admin import ShopifyAdminClient
from draft_order_gateway.integrations.contracts.draft_orders import UpstreamConfig

SHOP_HOST = "test-shop.myshopify.com"
ACCESS_TOKEN = "shpat_test_secret_token"

SUCCESS_PAYLOAD = {
    "data": {
        "draftOrderCreate": {
            "draftOrder": {"id": "gid://1", "name": "#D1", "invoiceUrl": "https://x/invoice"},
            "userErrors": [],
        }
    }
}


class FakeShopify:
    """Stands in for the Shopify Admin API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = copy.deepcopy(SUCCESS_PAYLOAD)
        self.delay = None
        self.connect_error = None
        self.cancelled = False

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.connect_error:
            raise httpx.ConnectError(self.connect_error, request=request)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if isinstance(self.payload, str):
            return httpx.Response(self.status_code, text=self.payload)
        return httpx.Response(self.status_code, json=self.payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def shopify_env(monkeypatch):
    monkeypatch.setenv("SHOPIFY_STORE_URL", SHOP_HOST)
    monkeypatch.setenv("SHOPIFY_ADMIN_API_TOKEN", ACCESS_TOKEN)
    monkeypatch.delenv("SHOPIFY_API_VERSION", raising=False)
    monkeypatch.delenv("DRAFT_ORDER_TIMEOUT_SECONDS", raising=False)


@pytest.fixture
def fake_shopify(monkeypatch):
    """Route the endpoint's Shopify client through an in-process fake."""
    fake = FakeShopify()
    monkeypatch.setattr(
        draft_orders,
        "_select_admin_client",
        lambda config: ShopifyAdminClient(config, transport=fake.transport()),
    )
    return fake


@pytest.fixture
def upstream_config():
    return UpstreamConfig(endpoint_host=SHOP_HOST, access_token=ACCESS_TOKEN)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def draft_order_body():
    return {
        "mutation": "mutation draftOrderCreate($input: DraftOrderInput!) { draftOrderCreate(input: $input) { draftOrder { id name invoiceUrl } userErrors { field message } } }",
        "variables": {"input": {"lineItems": [{"variantId": "gid://shopify/ProductVariant/1", "quantity": 2}]}},
        "paymentId": "pay_123",
        "totalAmount": 49.9,
    }
