"""
Recipe picklist — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Execute action.
  4. Report result to stdout; errors go to stderr with exit code 1.

Install and run::

    pip install -e .
    recipe-picklist --help
    recipe-picklist validate-config
    recipe-picklist generate --file codes.csv --market it
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from recipe_picklist.errors import PicklistError

app = typer.Typer(
    name="recipe-picklist",
    help="Generate warehouse picklist CSVs from recipe codes.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _echo_error(message: str) -> None:
    typer.echo(f"{typer.style('Error:', fg=typer.colors.RED)} {message}", err=True)


def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from recipe_picklist.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except PicklistError as exc:
        _echo_error(str(exc))
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from recipe_picklist.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("generate")
def generate(
    file: str = typer.Option(
        ...,
        "--file",
        "-f",
        help="CSV file whose first column holds recipe codes.",
    ),
    market: Optional[str] = typer.Option(
        None,
        "--market",
        "-m",
        help="Market code (default: planning.default_market, 'it').",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the picklist CSV (default: output.output_dir).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        help="Print run counts after the file name.",
    ),
) -> None:
    """Fetch recipes for the codes in FILE and write a picklist CSV.

    The file is named ``<ULID>_picklists.csv`` and is never overwritten.
    Exits with code 1 on any failure; no retries are attempted.
    """
    from recipe_picklist.pipeline.orchestrator import PicklistOrchestrator
    from recipe_picklist.reporting.formatters import format_run_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    orchestrator = PicklistOrchestrator(
        config=config,
        progress=typer.echo,
        track=lambda recipes: typer.progressbar(recipes, label="Recipes"),
    )
    try:
        result = orchestrator.run(
            Path(file),
            market=market,
            output_dir=Path(output_dir) if output_dir else None,
        )
    except PicklistError as exc:
        _echo_error(str(exc))
        raise typer.Exit(code=1)

    typer.echo(
        f"Picklist generated: {typer.style(result.file_name, fg=typer.colors.GREEN)}"
    )
    if summary:
        typer.echo(format_run_summary(result.run))


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    require_credentials: bool = typer.Option(
        False,
        "--require-credentials",
        help="Also fail if any credential field is missing.",
    ),
) -> None:
    """Validate the configuration and print parsed values.

    Credential values are never printed, only which fields are set.
    Exits with code 1 if the config fails validation.
    """
    from recipe_picklist.config import load_credentials
    from recipe_picklist.reporting.formatters import format_config_summary

    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(format_config_summary(config))

    if require_credentials:
        try:
            load_credentials(config)
        except PicklistError as exc:
            _echo_error(str(exc))
            raise typer.Exit(code=1)

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
