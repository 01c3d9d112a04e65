"""
Shopify Admin GraphQL HTTP Client.

Sends exactly one draft order mutation per call with the server-held access
token. Never raises for upstream failures: every result is returned as one of
the outcome variants in integrations/contracts/draft_orders.py.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from draft_order_gateway.integrations.contracts.draft_orders import (
    InboundRequest,
    TimeoutFailure,
    TransportFailure,
    UpstreamConfig,
    UpstreamOutcome,
    UpstreamRequest,
)
from draft_order_gateway.integrations.policy.response_wrappers import classify_upstream_response

logger = logging.getLogger(__name__)


class ShopifyAdminClient:
    def __init__(
        self,
        config: UpstreamConfig,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.timeout_seconds = timeout_seconds or config.timeout_seconds
        # Injectable for tests (httpx.MockTransport); None means the default network transport.
        self.transport = transport

    async def create_draft_order(self, inbound: InboundRequest) -> UpstreamOutcome:
        return await self.execute(UpstreamRequest.build(inbound, self.config))

    async def execute(self, request: UpstreamRequest) -> UpstreamOutcome:
        """
        Issue the call and classify its result.

        The request and its deadline are one unit: asyncio.wait_for cancels the
        in-flight post when the budget runs out, and leaving the AsyncClient
        block closes whatever connection it held.
        """
        logger.info("Submitting draft order mutation to %s", request.url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
                response = await asyncio.wait_for(
                    client.post(request.url, json=request.payload, headers=request.headers),
                    timeout=self.timeout_seconds,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("Shopify call cancelled after %ss without a response", self.timeout_seconds)
            return TimeoutFailure(timeout_seconds=self.timeout_seconds)
        except httpx.RequestError as e:
            logger.error(f"Request error connecting to Shopify Admin API: {e!r}")
            return TransportFailure(message=str(e) or type(e).__name__, kind=type(e).__name__)

        logger.info(f"Received Shopify response: status={response.status_code}")
        return classify_upstream_response(response.status_code, response.text)
