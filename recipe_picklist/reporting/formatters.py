"""
Plain-text formatters for CLI output.

Formatters return strings suitable for ``typer.echo()``; they never print.
"""

from __future__ import annotations

from recipe_picklist.config import AppConfig
from recipe_picklist.models.meta import RunMetadata


def format_run_summary(run: RunMetadata) -> str:
    """Return a short multi-line summary of a finished run."""
    lines = [
        f"  Run:      {run.run_slug}",
        f"  Market:   {run.market}",
        f"  Codes:    {run.codes_read}",
        f"  Recipes:  {run.recipes_fetched}",
        f"  Rows:     {run.rows_written}",
    ]
    if run.started_at and run.finished_at:
        elapsed = (run.finished_at - run.started_at).total_seconds()
        lines.append(f"  Elapsed:  {elapsed:.1f}s")
    if run.status == "failed":
        lines.append(f"  Failed in: {run.failed_state}")
    return "\n".join(lines)


def format_config_summary(config: AppConfig) -> str:
    """Return the validate-config overview. Credential values are never shown."""
    creds = config.credentials.model_dump()
    filled = [name for name, val in creds.items() if val]
    missing = [name for name, val in creds.items() if not val]
    lines = [
        f"  Auth service:     {config.auth.base_url}",
        f"  Planning service: {config.planning.base_url}",
        f"  Default market:   {config.planning.default_market}",
        f"  HTTP timeout:     {config.http.timeout_seconds:g}s",
        f"  Output dir:       {config.output.output_dir}",
        f"  Atomic write:     {config.output.atomic_write}",
        f"  Log level:        {config.logging.level}",
        f"  Credentials set:  {', '.join(filled) or '(none)'}",
    ]
    if missing:
        lines.append(f"  Credentials missing: {', '.join(missing)}")
    return "\n".join(lines)
