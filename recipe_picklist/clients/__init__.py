"""
recipe_picklist.clients — HTTP clients for the identity and planning services.

Modules:
  base            — Shared POST / status check / decode helpers.
  auth_client     — Password-grant token exchange.
  planning_client — Batched recipe search.
"""
