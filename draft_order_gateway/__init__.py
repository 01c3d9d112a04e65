"""
Draft Order Gateway.

Accepts a storefront draftOrderCreate mutation, forwards it to the Shopify Admin
GraphQL API with server-held credentials and answers with a uniform envelope.
"""
