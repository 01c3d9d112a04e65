import logging
from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from draft_order_gateway.error_handler import ErrorHandler, GatewayError, MethodNotAllowedError, ValidationError
from draft_order_gateway.integrations.clients.real_http.shopify_admin import ShopifyAdminClient
from draft_order_gateway.integrations.contracts.draft_orders import (
    Branch,
    InboundRequest,
    ResponseEnvelope,
    UpstreamConfig,
)
from draft_order_gateway.integrations.policy.response_wrappers import normalize_outcome
from draft_order_gateway.utils.config_loader import load_upstream_config

logger = logging.getLogger(__name__)

api = APIRouter()
draft_orders_api = api

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Every method is routed here so that unsupported ones get the 405 envelope
# (with CORS headers) instead of the framework default.
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

_error_handler = ErrorHandler()


def _select_admin_client(config: UpstreamConfig) -> ShopifyAdminClient:
    return ShopifyAdminClient(config)


@api.api_route("/create-draft-order", methods=ROUTED_METHODS, tags=["Draft Orders"])
async def create_draft_order(request: Request) -> Response:
    """
    Forward a draftOrderCreate mutation to Shopify with server-held credentials.

    Flow: admission -> configuration -> upstream call -> normalization. The
    configuration check runs before the body is read, so a misconfigured
    deployment answers 500 whatever the client sent.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    payment_id = None
    try:
        if request.method != "POST":
            raise MethodNotAllowedError(request.method)

        config = load_upstream_config()

        inbound = InboundRequest.from_body(await _read_json(request))
        payment_id = inbound.payment_id
        if not inbound.is_admissible():
            raise ValidationError(
                "Missing required fields: mutation and variables",
                received=inbound.received(),
            )

        logger.info("Creating draft order for payment %s (total: %s)", payment_id, inbound.total_amount)
        outcome = await _select_admin_client(config).create_draft_order(inbound)
        envelope = normalize_outcome(outcome, inbound)
        branch = outcome.branch
    except GatewayError as e:
        envelope = e.to_envelope()
        branch = e.branch
    except Exception as e:
        return _respond(_error_handler.handle_exception(e, context={"payment_id": payment_id}))

    _log_outcome(branch, envelope, payment_id)
    return _respond(envelope)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return {}


def _respond(envelope: ResponseEnvelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.http_status, content=envelope.to_body(), headers=CORS_HEADERS)


def _log_outcome(branch: Branch, envelope: ResponseEnvelope, payment_id: Any) -> None:
    level = logging.INFO if branch is Branch.SUCCESS else logging.WARNING
    logger.log(
        level,
        "Draft order request finished: branch=%s status=%s payment_id=%s",
        branch.value,
        envelope.http_status,
        payment_id,
        extra={"branch": branch.value, "status_code": envelope.http_status, "payment_id": payment_id},
    )
