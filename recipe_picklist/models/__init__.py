"""
recipe_picklist.models — pydantic models shared across the run.

Modules:
  recipe   — Recipe, Sku and the token/search wire responses.
  picklist — PicklistRow and the CSV header.
  meta     — Credentials, AuthContext and RunMetadata.
"""
