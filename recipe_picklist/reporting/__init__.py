"""
recipe_picklist.reporting — Picklist output and CLI summaries.

Modules:
  export     — CSV picklist writer and run-unique file naming.
  formatters — Plain-text run summary for Typer CLI commands.
"""
