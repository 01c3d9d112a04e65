"""Error taxonomy for the draft order gateway and the outermost exception fallback."""
from typing import Any, Dict, List, Optional
import logging

from draft_order_gateway.integrations.contracts.draft_orders import Branch, ResponseEnvelope

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised before the upstream call; rendered straight into an envelope."""

    status_code = 500
    branch = Branch.UNEXPECTED_ERROR

    def to_envelope(self) -> ResponseEnvelope:
        return ResponseEnvelope(http_status=self.status_code, success=False, error=str(self))


class ConfigError(GatewayError):
    status_code = 500
    branch = Branch.CONFIG_ERROR

    def __init__(self, message: str, *, missing: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])

    def to_envelope(self) -> ResponseEnvelope:
        return ResponseEnvelope(
            http_status=self.status_code,
            success=False,
            error="Server configuration error",
            message=str(self),
        )


class ValidationError(GatewayError):
    status_code = 400
    branch = Branch.VALIDATION_ERROR

    def __init__(self, message: str, *, received: Dict[str, bool]) -> None:
        super().__init__(message)
        self.received = received

    def to_envelope(self) -> ResponseEnvelope:
        return ResponseEnvelope(
            http_status=self.status_code,
            success=False,
            error=str(self),
            received=self.received,
        )


class MethodNotAllowedError(GatewayError):
    status_code = 405
    branch = Branch.METHOD_NOT_ALLOWED

    def __init__(self, method: str) -> None:
        super().__init__("Method not allowed")
        self.method = method

    def to_envelope(self) -> ResponseEnvelope:
        return ResponseEnvelope(
            http_status=self.status_code,
            success=False,
            error=str(self),
            message=f"{self.method} is not supported; send a POST request.",
        )


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> ResponseEnvelope:
        context = context or {}
        logger.error(
            "Unhandled exception in draft order gateway: %s",
            exc,
            exc_info=True,
            extra={
                "branch": Branch.UNEXPECTED_ERROR.value,
                "status_code": 500,
                "payment_id": context.get("payment_id"),
            },
        )
        return ResponseEnvelope(http_status=500, success=False, error=str(exc) or type(exc).__name__)
