"""
recipe_picklist.ingestion — Input file readers.

Modules:
  code_csv — Recipe code batch from a delimited file.
"""
