"""
Draft order contracts.

Defines the shapes that flow through a single draft order request:
- the inbound checkout payload (mutation, variables, correlation fields)
- the resolved upstream configuration and the outbound Shopify request
- the outcome of the one upstream call (a closed set of variants)
- the response envelope returned to the client

Both the endpoint and the Shopify client use these models, so the classification
logic never has to guess at ad-hoc dict layouts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr


DEFAULT_API_VERSION = "2024-01"
DEFAULT_TIMEOUT_SECONDS = 25.0
ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Branch(str, Enum):
    """Terminal branch of a request, as reported in the outcome log line."""

    CONFIG_ERROR = "config_error"
    VALIDATION_ERROR = "validation_error"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"
    UPSTREAM_HTTP_ERROR = "upstream_http_error"
    GRAPHQL_ERROR = "graphql_error"
    BUSINESS_ERROR = "business_error"
    MISSING_DRAFT_ORDER = "missing_draft_order"
    SUCCESS = "success"
    UNEXPECTED_ERROR = "unexpected_error"


# ---------------------------------------------------------------------------
# Inbound / configuration
# ---------------------------------------------------------------------------

def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (dict, list)):
        return len(value) > 0
    return True


@dataclass
class InboundRequest:
    """Body of a POST to the gateway. paymentId/totalAmount are never interpreted."""

    mutation: Any = None
    variables: Any = None
    payment_id: Any = None
    total_amount: Any = None

    @classmethod
    def from_body(cls, body: Any) -> "InboundRequest":
        if not isinstance(body, dict):
            body = {}
        return cls(
            mutation=body.get("mutation"),
            variables=body.get("variables"),
            payment_id=body.get("paymentId"),
            total_amount=body.get("totalAmount"),
        )

    def received(self) -> Dict[str, bool]:
        return {
            "mutation": _is_present(self.mutation),
            "variables": _is_present(self.variables),
            "paymentId": _is_present(self.payment_id),
            "totalAmount": _is_present(self.total_amount),
        }

    def is_admissible(self) -> bool:
        return (
            isinstance(self.mutation, str)
            and _is_present(self.mutation)
            and isinstance(self.variables, dict)
            and _is_present(self.variables)
        )


class UpstreamConfig(BaseModel):
    """Server-held Shopify credentials. The token never renders in repr or dumps."""

    endpoint_host: str = Field(min_length=1)
    access_token: SecretStr
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @property
    def graphql_url(self) -> str:
        return f"https://{self.endpoint_host}/admin/api/{self.api_version}/graphql.json"


@dataclass(frozen=True)
class UpstreamRequest:
    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(repr=False)

    @classmethod
    def build(cls, inbound: InboundRequest, config: UpstreamConfig) -> "UpstreamRequest":
        return cls(
            url=config.graphql_url,
            payload={"query": inbound.mutation, "variables": inbound.variables},
            headers={
                "Content-Type": "application/json",
                ACCESS_TOKEN_HEADER: config.access_token.get_secret_value(),
            },
        )


# ---------------------------------------------------------------------------
# Upstream outcome variants
# ---------------------------------------------------------------------------

class DraftOrderResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    invoice_url: Optional[str] = Field(default=None, alias="invoiceUrl")

    def as_payload(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "invoiceUrl": self.invoice_url}


@dataclass(frozen=True)
class TransportFailure:
    branch: ClassVar[Branch] = Branch.TRANSPORT_ERROR

    message: str
    kind: str


@dataclass(frozen=True)
class TimeoutFailure:
    branch: ClassVar[Branch] = Branch.TIMEOUT

    timeout_seconds: float


@dataclass(frozen=True)
class HttpError:
    branch: ClassVar[Branch] = Branch.UPSTREAM_HTTP_ERROR

    status: int
    body: str


@dataclass(frozen=True)
class GraphQLError:
    branch: ClassVar[Branch] = Branch.GRAPHQL_ERROR

    errors: List[Any]


@dataclass(frozen=True)
class BusinessError:
    branch: ClassVar[Branch] = Branch.BUSINESS_ERROR

    user_errors: List[Any]


@dataclass(frozen=True)
class MissingDraftOrder:
    """2xx response without errors that still carries no draft order."""

    branch: ClassVar[Branch] = Branch.MISSING_DRAFT_ORDER

    detail: Any = None


@dataclass(frozen=True)
class Success:
    branch: ClassVar[Branch] = Branch.SUCCESS

    draft_order: DraftOrderResult
    raw_data: Dict[str, Any]


UpstreamOutcome = Union[
    TransportFailure,
    TimeoutFailure,
    HttpError,
    GraphQLError,
    BusinessError,
    MissingDraftOrder,
    Success,
]


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

class ResponseEnvelope(BaseModel):
    """Uniform response shape. Only explicitly set fields are serialized."""

    model_config = ConfigDict(populate_by_name=True)

    http_status: int = Field(exclude=True)
    success: bool
    error: Optional[str] = None
    message: Optional[str] = None
    error_type: Optional[str] = Field(default=None, alias="type")
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    details: Any = None
    errors: Optional[List[Any]] = None
    hint: Optional[str] = None
    received: Optional[Dict[str, bool]] = None
    data: Any = None
    draft_order_id: Optional[str] = Field(default=None, alias="draftOrderId")
    draft_order_name: Optional[str] = Field(default=None, alias="draftOrderName")
    invoice_url: Optional[str] = Field(default=None, alias="invoiceUrl")
    draft_order: Optional[Dict[str, Any]] = Field(default=None, alias="draftOrder")
    payment_id: Any = Field(default=None, alias="paymentId")
    total_amount: Any = Field(default=None, alias="totalAmount")

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
