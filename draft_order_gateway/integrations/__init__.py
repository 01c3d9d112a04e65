"""
Integrations layer.
This package contains all code used to communicate with the Shopify Admin API:
- contracts: request/outcome/envelope shapes shared by every layer
- clients/real_http: the HTTP client that performs the single upstream call
- policy: classification of upstream responses and envelope construction

Key rule:
- The endpoint MUST NOT call Shopify directly; it goes through the client.
"""

from .contracts.draft_orders import (
    Branch,
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
    UpstreamConfig,
    UpstreamOutcome,
    UpstreamRequest,
)

__all__ = [
    "Branch", "InboundRequest", "UpstreamConfig", "UpstreamRequest",
    "DraftOrderResult", "ResponseEnvelope", "UpstreamOutcome",
    # outcome variants
    "TransportFailure", "TimeoutFailure", "HttpError", "GraphQLError",
    "BusinessError", "MissingDraftOrder", "Success",
]
