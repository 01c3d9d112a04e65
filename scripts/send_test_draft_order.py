#!/usr/bin/env python3
"""
Smoke test for a running gateway: sends one draftOrderCreate mutation.

Start the API first (in another terminal):
  uvicorn draft_order_gateway.api.main:app --host 127.0.0.1 --port 8000

Then run this script:
  python scripts/send_test_draft_order.py --variant-id gid://shopify/ProductVariant/123
  python scripts/send_test_draft_order.py --base-url http://127.0.0.1:8000 --quantity 2 --payment-id pay_local_1

This creates a real draft order in the configured Shopify store.
"""

from __future__ import annotations

import argparse
import json
import sys

import httpx

DRAFT_ORDER_MUTATION = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder { id name invoiceUrl }
    userErrors { field message }
  }
}
"""


def main() -> int:
    parser = argparse.ArgumentParser(description="Send a test draft order through the gateway")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Gateway base URL")
    parser.add_argument("--variant-id", required=True, help="Shopify product variant GID")
    parser.add_argument("--quantity", type=int, default=1)
    parser.add_argument("--email", default=None, help="Customer email for the draft order")
    parser.add_argument("--payment-id", default="smoke-test", help="Correlation id echoed back by the gateway")
    parser.add_argument("--total-amount", type=float, default=None)
    args = parser.parse_args()

    draft_input = {"lineItems": [{"variantId": args.variant_id, "quantity": args.quantity}]}
    if args.email:
        draft_input["email"] = args.email

    body = {
        "mutation": DRAFT_ORDER_MUTATION,
        "variables": {"input": draft_input},
        "paymentId": args.payment_id,
        "totalAmount": args.total_amount,
    }

    url = f"{args.base_url.rstrip('/')}/api/create-draft-order"
    print(f"POST {url}")
    try:
        r = httpx.post(url, json=body, timeout=30)
    except httpx.RequestError as e:
        print(f"   FAIL: {e}")
        print("   → Start the API first: uvicorn draft_order_gateway.api.main:app --host 127.0.0.1 --port 8000")
        return 1

    print(f"   status: {r.status_code}")
    print(json.dumps(r.json(), indent=2))
    return 0 if r.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
