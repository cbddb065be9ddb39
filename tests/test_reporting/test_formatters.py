"""Tests for recipe_picklist.reporting.formatters."""

from __future__ import annotations

from datetime import timedelta

from recipe_picklist.config import AppConfig
from recipe_picklist.models.meta import RunMetadata
from recipe_picklist.reporting.formatters import format_config_summary, format_run_summary
from recipe_picklist.utils.time_utils import utcnow


def test_run_summary_counts() -> None:
    start = utcnow()
    run = RunMetadata(
        run_slug="01J0000000000000000000000A",
        market="it",
        source_path="codes.csv",
        status="success",
        codes_read=3,
        recipes_fetched=2,
        rows_written=5,
        started_at=start,
        finished_at=start + timedelta(seconds=2),
    )
    text = format_run_summary(run)
    assert "01J0000000000000000000000A" in text
    assert "Recipes:  2" in text
    assert "Rows:     5" in text
    assert "Elapsed:  2.0s" in text
    assert "Failed" not in text


def test_run_summary_failed_state() -> None:
    run = RunMetadata(
        run_slug="x",
        market="it",
        source_path="codes.csv",
        state="failed",
        failed_state="fetch_recipes",
        status="failed",
        started_at=utcnow(),
    )
    assert "Failed in: fetch_recipes" in format_run_summary(run)


def test_config_summary_never_shows_secret_values(app_config: AppConfig) -> None:
    text = format_config_summary(app_config)
    assert "hunter2" not in text
    assert "client-secret" not in text
    assert "username, password, key, secret, country" in text
    assert "missing" not in text


def test_config_summary_lists_missing_credentials() -> None:
    text = format_config_summary(AppConfig())
    assert "Credentials set:  (none)" in text
    assert "Credentials missing: username, password, key, secret, country" in text
