"""
Run context and run metadata.

``Credentials`` and ``AuthContext`` are the explicit values threaded through
the network-facing components. Nothing about a run lives in module globals.

``RunMetadata`` is the pipeline execution audit record. It is the **only**
model here that is NOT frozen — its ``state``, ``status``, counters,
``error_message`` and ``finished_at`` are updated as the run progresses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

VALID_PIPELINE_STATES = frozenset({
    "read_input", "authenticate", "fetch_recipes", "build_and_emit", "done", "failed",
})
VALID_RUN_STATUSES = frozenset({"started", "success", "failed"})


class Credentials(BaseModel):
    """Identity service credentials.

    ``password`` and ``secret`` are ``SecretStr`` so they render as
    ``**********`` in reprs and logs.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr
    key: str
    secret: SecretStr
    country: str


class AuthContext(BaseModel):
    """Bearer token plus the market it is used against, for one run."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    market: str

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token.get_secret_value()}"


class RunMetadata(BaseModel):
    """Pipeline execution audit record.

    Attributes:
        run_slug: ULID string uniquely identifying this run. Also used as the
            output file name prefix.
        market: Market code the recipes were searched in.
        source_path: Path of the recipe code file.
        state: Current ``PipelineState`` value.
        status: ``started`` until the run ends in ``success`` or ``failed``.
        codes_read: Number of recipe codes read from the input file.
        recipes_fetched: Number of recipes returned by the planning service.
        rows_written: Number of picklist data rows written.
        output_path: Path of the written picklist, once emitted.
        failed_state: State the run was in when it failed.
        error_message: Error description if ``status == "failed"``.
        started_at: UTC datetime when the run began.
        finished_at: UTC datetime when the run completed or failed.
    """

    # Not frozen — state, status, counters are updated during execution
    model_config = ConfigDict(frozen=False, validate_assignment=True)

    run_slug: str
    market: str
    source_path: str
    state: str = "read_input"
    status: str = "started"
    codes_read: int = 0
    recipes_fetched: int = 0
    rows_written: int = 0
    output_path: Optional[str] = None
    failed_state: Optional[str] = None
    error_message: Optional[str] = None
    started_at: datetime
    finished_at: Optional[datetime] = None

    @field_validator("state", "failed_state")
    @classmethod
    def validate_state(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in VALID_PIPELINE_STATES:
            raise ValueError(
                f"Unknown state '{v}'. Must be one of {sorted(VALID_PIPELINE_STATES)}."
            )
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in VALID_RUN_STATUSES:
            raise ValueError(
                f"Unknown status '{v}'. Must be one of {sorted(VALID_RUN_STATUSES)}."
            )
        return v
