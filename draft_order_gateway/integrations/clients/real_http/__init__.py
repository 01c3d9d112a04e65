"""
Real HTTP integration clients.

These clients communicate with Shopify over the network:
- Shopify Admin GraphQL API (draftOrderCreate)

Important:
- Must return the outcome variants from integrations/contracts/draft_orders.py
- Must not retry; one inbound request is one upstream call
"""
