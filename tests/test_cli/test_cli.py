"""Tests for the recipe-picklist Typer CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from recipe_picklist.cli import app
from recipe_picklist.errors import AuthenticationError, NoCodesFoundError
from recipe_picklist.models.meta import RunMetadata
from recipe_picklist.pipeline.orchestrator import PicklistRunResult
from recipe_picklist.utils.time_utils import utcnow

runner = CliRunner()

CONFIG_BODY = """
[auth]
base_url = "https://auth.test"

[planning]
base_url = "https://planning.test"

[credentials]
username = "picker"
password = "hunter2"
key = "client-key"
secret = "client-secret"
country = "it"
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config" / "default.toml"
    path.parent.mkdir()
    path.write_text(CONFIG_BODY, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("recipe_picklist.utils.logging.configure_logging"):
        yield


def _fake_result(tmp_path: Path) -> PicklistRunResult:
    run = RunMetadata(
        run_slug="01J0000000000000000000000A",
        market="it",
        source_path="codes.csv",
        state="done",
        status="success",
        codes_read=2,
        recipes_fetched=1,
        rows_written=1,
        started_at=utcnow(),
        finished_at=utcnow(),
    )
    return PicklistRunResult(
        run=run, output_path=tmp_path / "01J0000000000000000000000A_picklists.csv"
    )


def test_generate_success(config_file, codes_file, tmp_path) -> None:
    with patch(
        "recipe_picklist.pipeline.orchestrator.PicklistOrchestrator.run",
        return_value=_fake_result(tmp_path),
    ) as run:
        result = runner.invoke(
            app, ["generate", "-f", str(codes_file), "-m", "de", "--config", str(config_file)]
        )

    assert result.exit_code == 0, result.output
    assert "Picklist generated: 01J0000000000000000000000A_picklists.csv" in result.output
    run.assert_called_once_with(codes_file, market="de", output_dir=None)


def test_generate_market_defaults_to_none(config_file, codes_file, tmp_path) -> None:
    with patch(
        "recipe_picklist.pipeline.orchestrator.PicklistOrchestrator.run",
        return_value=_fake_result(tmp_path),
    ) as run:
        result = runner.invoke(
            app,
            ["generate", "--file", str(codes_file), "--config", str(config_file),
             "--output-dir", str(tmp_path / "out"), "--summary"],
        )

    assert result.exit_code == 0, result.output
    run.assert_called_once_with(codes_file, market=None, output_dir=tmp_path / "out")
    assert "Rows:     1" in result.output


def test_generate_tracks_recipes_with_progressbar(config_file, codes_file, tmp_path) -> None:
    with patch("recipe_picklist.pipeline.orchestrator.PicklistOrchestrator") as orch_cls:
        orch_cls.return_value.run.return_value = _fake_result(tmp_path)
        result = runner.invoke(
            app, ["generate", "-f", str(codes_file), "--config", str(config_file)]
        )

    assert result.exit_code == 0, result.output
    track = orch_cls.call_args.kwargs["track"]
    with track(["a", "b"]) as bar:
        assert list(bar) == ["a", "b"]


def test_generate_failure_exits_1(config_file, codes_file) -> None:
    with patch(
        "recipe_picklist.pipeline.orchestrator.PicklistOrchestrator.run",
        side_effect=AuthenticationError("invalid_grant", status_code=401),
    ):
        result = runner.invoke(
            app, ["generate", "-f", str(codes_file), "--config", str(config_file)]
        )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "invalid_grant" in result.output
    assert "Picklist generated" not in result.output


def test_generate_no_codes(config_file, tmp_path) -> None:
    with patch(
        "recipe_picklist.pipeline.orchestrator.PicklistOrchestrator.run",
        side_effect=NoCodesFoundError("empty.csv"),
    ):
        result = runner.invoke(
            app, ["generate", "-f", str(tmp_path / "empty.csv"), "--config", str(config_file)]
        )
    assert result.exit_code == 1
    assert "No codes found" in result.output


def test_generate_requires_file(config_file) -> None:
    result = runner.invoke(app, ["generate", "--config", str(config_file)])
    assert result.exit_code != 0


def test_generate_bad_config_exits_1(codes_file, tmp_path) -> None:
    result = runner.invoke(
        app, ["generate", "-f", str(codes_file), "--config", str(tmp_path / "missing.toml")]
    )
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_validate_config(config_file) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "[OK] Config valid." in result.output
    assert "https://planning.test" in result.output
    assert "hunter2" not in result.output


def test_validate_config_require_credentials(tmp_path) -> None:
    path = tmp_path / "default.toml"
    path.write_text('[planning]\ndefault_market = "it"\n', encoding="utf-8")
    result = runner.invoke(
        app, ["validate-config", "--config", str(path), "--require-credentials"]
    )
    assert result.exit_code == 1
    assert "Missing credentials" in result.output
