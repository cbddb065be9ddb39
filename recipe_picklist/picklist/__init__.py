"""
recipe_picklist.picklist — Ratio-to-pick transformation.

Pure functions only: no I/O, no logging above DEBUG.

Modules:
  ratio   — Serving ratio → integer pick count for one tier.
  builder — Recipe → ordered ``PicklistRow`` list.
"""
