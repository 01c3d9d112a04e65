"""
Contracts (data models).

This folder defines the shapes exchanged with Shopify and with the client:
- the inbound checkout payload and the outbound GraphQL request
- the closed set of upstream outcomes
- the response envelope

Why this exists:
- The Shopify client and the endpoint agree on one set of models
- Classification works on typed variants, not on optional dict fields
"""
