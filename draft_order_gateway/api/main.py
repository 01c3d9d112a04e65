"""
FastAPI application - Main entry point

Run with:
  uvicorn draft_order_gateway.api.main:app --host 0.0.0.0 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from datetime import datetime

from fastapi import FastAPI

from draft_order_gateway.api.endpoints.draft_orders import draft_orders_api
from draft_order_gateway.api.middleware import RequestIDMiddleware
from draft_order_gateway.utils.logging_config import configure_logging

configure_logging(
    level=os.getenv("LOG_LEVEL", "INFO"),
    json_format=os.getenv("LOG_JSON", "true").lower() == "true",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Draft Order Gateway",
    description="Forwards storefront draftOrderCreate mutations to the Shopify Admin API",
    version="1.0.0",
)

app.add_middleware(RequestIDMiddleware)

# Register draft order router (path kept at /api/create-draft-order for existing checkout clients)
app.include_router(draft_orders_api, prefix="/api", tags=["Draft Orders"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe. Does not call Shopify."""
    return {"status": "healthy", "service": "Draft Order Gateway", "timestamp": datetime.now().isoformat()}
