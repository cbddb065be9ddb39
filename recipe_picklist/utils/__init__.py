"""
recipe_picklist.utils — cross-cutting helpers.

Modules:
  logging    — configure_logging, run_context and secret redaction.
  time_utils — UTC timestamps.
"""
