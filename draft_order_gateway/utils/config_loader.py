"""
Configuration loader for the Shopify upstream.

All environment lookups for the gateway go through this module. Values are
either required (no default, request fails closed when absent) or optional
(fall back to a fixed default).
"""

import logging
import os
from typing import List, Optional

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from draft_order_gateway.error_handler import ConfigError
from draft_order_gateway.integrations.contracts.draft_orders import (
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT_SECONDS,
    UpstreamConfig,
)

load_dotenv()

logger = logging.getLogger(__name__)

STORE_URL_ENV = "SHOPIFY_STORE_URL"
ACCESS_TOKEN_ENV = "SHOPIFY_ADMIN_API_TOKEN"
API_VERSION_ENV = "SHOPIFY_API_VERSION"
TIMEOUT_ENV = "DRAFT_ORDER_TIMEOUT_SECONDS"

REQUIRED_ENV = (STORE_URL_ENV, ACCESS_TOKEN_ENV)


def get_required_env(name: str) -> Optional[str]:
    """Return the stripped value of a required variable, or None when unset/blank."""
    value = (os.getenv(name) or "").strip()
    return value or None


def get_optional_env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    return value or default


def normalize_store_host(raw: str) -> str:
    """Accept 'shop.myshopify.com', 'https://shop.myshopify.com/' and similar."""
    host = raw.strip()
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    return host.rstrip("/")


def load_upstream_config() -> UpstreamConfig:
    """
    Resolve the Shopify endpoint and credentials for one request.

    Raises:
        ConfigError: if a required variable is missing or a value is invalid.
            The message names variables only, never their values.
    """
    missing: List[str] = [name for name in REQUIRED_ENV if get_required_env(name) is None]
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )

    raw_timeout = get_optional_env(TIMEOUT_ENV, str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout_seconds = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds") from exc

    try:
        config = UpstreamConfig(
            endpoint_host=normalize_store_host(get_required_env(STORE_URL_ENV)),
            access_token=get_required_env(ACCESS_TOKEN_ENV),
            api_version=get_optional_env(API_VERSION_ENV, DEFAULT_API_VERSION),
            timeout_seconds=timeout_seconds,
        )
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        logger.error("Upstream config validation failed for fields: %s", fields)
        raise ConfigError(f"Invalid upstream configuration: {', '.join(fields)}") from e

    try:
        httpx.URL(config.graphql_url)
    except httpx.InvalidURL as e:
        raise ConfigError(f"{STORE_URL_ENV} is not a valid host") from e
    return config
