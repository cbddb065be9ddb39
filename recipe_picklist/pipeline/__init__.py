"""
recipe_picklist.pipeline — run orchestration.

Modules:
  orchestrator — PicklistOrchestrator state machine and PicklistRunResult.
"""
