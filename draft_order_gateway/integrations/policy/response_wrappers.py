from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import ValidationError
from typing_extensions import assert_never

from draft_order_gateway.integrations.contracts.draft_orders import (
    BusinessError,
    DraftOrderResult,
    GraphQLError,
    HttpError,
    InboundRequest,
    MissingDraftOrder,
    ResponseEnvelope,
    Success,
    TimeoutFailure,
    TransportFailure,
    UpstreamOutcome,
)

GRAPHQL_ERROR_HINT = "Check the mutation syntax and the access token's API scopes."
BUSINESS_ERROR_HINT = "Check the input fields (variant IDs, customer, addresses, line items)."


def classify_upstream_response(status_code: int, text: str) -> UpstreamOutcome:
    """
    Ordered decision cascade for a completed upstream call.

    Each check only runs when the previous ones did not classify the response:
    HTTP status, top-level GraphQL errors, draftOrderCreate.userErrors, then the
    presence of draftOrderCreate.draftOrder.
    """
    if not 200 <= status_code < 300:
        return HttpError(status=status_code, body=text)

    try:
        payload = json.loads(text) if text else None
    except ValueError:
        return MissingDraftOrder(detail={"message": "Upstream returned a non-JSON body", "body": text})
    if not isinstance(payload, dict):
        return MissingDraftOrder(detail={"message": "Upstream returned an unexpected body", "body": payload})

    errors = payload.get("errors")
    if errors is not None:
        return GraphQLError(errors=errors if isinstance(errors, list) else [errors])

    data = payload.get("data")
    create_result = _dig(data, "draftOrderCreate")

    user_errors = _dig(create_result, "userErrors")
    if user_errors:
        return BusinessError(user_errors=user_errors if isinstance(user_errors, list) else [user_errors])

    draft_order = _dig(create_result, "draftOrder")
    if not isinstance(draft_order, dict) or not draft_order:
        return MissingDraftOrder(detail=data)

    try:
        result = DraftOrderResult.model_validate(draft_order)
    except ValidationError:
        return MissingDraftOrder(
            detail={"message": "Upstream returned a malformed draft order", "draftOrder": draft_order}
        )
    return Success(draft_order=result, raw_data=data)


def normalize_outcome(outcome: UpstreamOutcome, inbound: InboundRequest) -> ResponseEnvelope:
    """Map exactly one upstream outcome onto its response envelope."""
    if isinstance(outcome, TimeoutFailure):
        return ResponseEnvelope(
            http_status=504,
            success=False,
            error=f"Request to Shopify timed out after {outcome.timeout_seconds:g} seconds",
        )
    if isinstance(outcome, TransportFailure):
        return ResponseEnvelope(
            http_status=500,
            success=False,
            error=outcome.message,
            error_type=outcome.kind,
        )
    if isinstance(outcome, HttpError):
        return ResponseEnvelope(
            http_status=outcome.status,
            success=False,
            error="Shopify API request failed",
            status_code=outcome.status,
            details=outcome.body,
        )
    if isinstance(outcome, GraphQLError):
        return ResponseEnvelope(
            http_status=400,
            success=False,
            errors=outcome.errors,
            hint=GRAPHQL_ERROR_HINT,
        )
    if isinstance(outcome, BusinessError):
        return ResponseEnvelope(
            http_status=400,
            success=False,
            errors=outcome.user_errors,
            hint=BUSINESS_ERROR_HINT,
        )
    if isinstance(outcome, MissingDraftOrder):
        return ResponseEnvelope(
            http_status=500,
            success=False,
            error="Failed to create draft order",
            details=outcome.detail,
        )
    if isinstance(outcome, Success):
        draft_order = outcome.draft_order
        return ResponseEnvelope(
            http_status=200,
            success=True,
            data=outcome.raw_data,
            draft_order_id=draft_order.id,
            draft_order_name=draft_order.name,
            invoice_url=draft_order.invoice_url,
            draft_order=draft_order.as_payload(),
            payment_id=inbound.payment_id,
            total_amount=inbound.total_amount,
        )
    assert_never(outcome)


def _dig(data: Any, key: str) -> Optional[Any]:
    if not isinstance(data, dict):
        return None
    return data.get(key)
