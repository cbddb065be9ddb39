"""
Picklist run orchestration.

The ``PicklistOrchestrator`` drives one run through a strictly linear
sequence of states:

  read_input → authenticate → fetch_recipes → build_and_emit → done

with ``failed`` reachable from every state.

  read_input:      Read the recipe code batch. Empty batch → failed
                   ("No codes found"), before any credential or network use.
  authenticate:    Load credentials, exchange them for a bearer token.
  fetch_recipes:   One batched search request. Empty result → failed
                   ("No recipes found"); no file is written.
  build_and_emit:  Expand recipes to rows, write ``{run_slug}_picklists.csv``.
  done:            ``PicklistRunResult`` returned to the caller.

Failure policy
--------------
Every failure is fatal. There is no retry, partial success or resumption.
The failure is recorded on the run's ``RunMetadata`` (state, message,
finish time), logged, and the original exception is re-raised.

Run context
-----------
Credentials and the token are never stored on module globals. The token and
market travel together as an ``AuthContext`` from authenticate to
fetch_recipes; one ``httpx.Client`` is opened per run and shared by both
service clients.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import ContextManager, Optional

import httpx

from recipe_picklist.clients.auth_client import AuthClient
from recipe_picklist.clients.planning_client import PlanningClient
from recipe_picklist.config import AppConfig, load_credentials
from recipe_picklist.errors import NoRecipesFoundError
from recipe_picklist.ingestion.code_csv import read_recipe_codes
from recipe_picklist.models.meta import AuthContext, Credentials, RunMetadata
from recipe_picklist.models.picklist import PicklistRow
from recipe_picklist.models.recipe import Recipe
from recipe_picklist.picklist.builder import build_picklist_rows
from recipe_picklist.reporting.export import (
    new_picklist_filename,
    new_run_id,
    write_picklist_csv,
)
from recipe_picklist.utils.logging import run_context
from recipe_picklist.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class PipelineState(StrEnum):
    READ_INPUT = "read_input"
    AUTHENTICATE = "authenticate"
    FETCH_RECIPES = "fetch_recipes"
    BUILD_AND_EMIT = "build_and_emit"
    DONE = "done"
    FAILED = "failed"


# ── Result types ──────────────────────────────────────────────────────────────

@dataclass
class PicklistRunResult:
    """Outcome of a successful run.

    Attributes:
        run:         Finalised ``RunMetadata`` (status ``success``).
        output_path: Path of the written picklist CSV.
        rows:        Rows written, in output order.
    """

    run:         RunMetadata
    output_path: Path
    rows:        list[PicklistRow] = field(default_factory=list)

    @property
    def file_name(self) -> str:
        return self.output_path.name


# ── Orchestrator ──────────────────────────────────────────────────────────────

class PicklistOrchestrator:
    """Coordinates one picklist run.

    Args:
        config:      AppConfig for this run.
        credentials: Pre-built credentials; loaded from ``config`` at the
                     authenticate step when omitted.
        http:        Externally managed ``httpx.Client`` (left open). When
                     omitted a client is opened and closed per run.
        progress:    Optional callback receiving short status lines.
        track:       Optional wrapper around the recipe list during row
                     building, e.g. ``typer.progressbar``; must return a
                     context manager yielding an iterable of the recipes.
    """

    def __init__(
        self,
        config: AppConfig,
        credentials: Optional[Credentials] = None,
        http: Optional[httpx.Client] = None,
        progress: Optional[Callable[[str], None]] = None,
        track: Optional[Callable[[list[Recipe]], ContextManager[Iterable[Recipe]]]] = None,
    ) -> None:
        self.config      = config
        self.credentials = credentials
        self.http        = http
        self.progress    = progress
        self.track       = track
        self.last_run: Optional[RunMetadata] = None

    def run(
        self,
        codes_path: Path,
        market: Optional[str] = None,
        output_dir: Optional[Path] = None,
    ) -> PicklistRunResult:
        """Execute the full pipeline.

        Args:
            codes_path: Delimited file whose first column holds recipe codes.
            market:     Market code; defaults to ``config.planning.default_market``.
            output_dir: Destination directory; defaults to ``config.output.output_dir``.

        Returns:
            ``PicklistRunResult`` for the written picklist.

        Raises:
            PicklistError: Any input, authentication, fetch or output failure,
                after the failure is recorded on ``self.last_run``.
        """
        market = (market or self.config.planning.default_market).strip().lower()
        run = RunMetadata(
            run_slug=new_run_id(),
            market=market,
            source_path=str(codes_path),
            started_at=utcnow(),
        )
        self.last_run = run

        with run_context(run.run_slug):
            logger.info(
                "Picklist run starting | run_slug=%s | market=%s | source=%s",
                run.run_slug, market, codes_path,
            )

            try:
                codes = self._read_input(run, Path(codes_path))

                with self._http_client() as http:
                    self._transition(run, PipelineState.AUTHENTICATE)
                    auth = self._authenticate(http, market)

                    self._transition(run, PipelineState.FETCH_RECIPES)
                    recipes = self._fetch_recipes(run, http, auth, codes)

                self._transition(run, PipelineState.BUILD_AND_EMIT)
                rows, path = self._build_and_emit(run, recipes, output_dir)

            except Exception as exc:
                self._fail(run, exc)
                raise

            self._transition(run, PipelineState.DONE)
            run.status = "success"
            run.finished_at = utcnow()
            logger.info(
                "Picklist run completed | recipes=%d | rows=%d | file=%s",
                run.recipes_fetched, run.rows_written, path,
            )
        return PicklistRunResult(run=run, output_path=path, rows=rows)

    # ── Steps ─────────────────────────────────────────────────────────────────

    def _read_input(self, run: RunMetadata, codes_path: Path) -> list[str]:
        codes = read_recipe_codes(codes_path, delimiter=self.config.output.input_delimiter)
        run.codes_read = len(codes)
        return codes

    def _authenticate(self, http: httpx.Client, market: str) -> AuthContext:
        credentials = self.credentials or load_credentials(self.config)
        token = AuthClient(http, self.config.auth.base_url).fetch_token(credentials)
        return AuthContext(token=token, market=market)

    def _fetch_recipes(
        self,
        run: RunMetadata,
        http: httpx.Client,
        auth: AuthContext,
        codes: list[str],
    ) -> list[Recipe]:
        self._report("Getting recipes...")
        client = PlanningClient(
            http, self.config.planning.base_url, expand=self.config.planning.expand
        )
        recipes = client.search_recipes(auth, codes)
        run.recipes_fetched = len(recipes)
        if not recipes:
            raise NoRecipesFoundError(auth.market, len(codes))
        return recipes

    def _build_and_emit(
        self,
        run: RunMetadata,
        recipes: list[Recipe],
        output_dir: Optional[Path],
    ) -> tuple[list[PicklistRow], Path]:
        self._report("Generating picklist...")
        with self._track(recipes) as tracked:
            rows = build_picklist_rows(tracked)
        path = write_picklist_csv(
            rows,
            Path(output_dir or self.config.output.output_dir),
            file_name=new_picklist_filename(run.run_slug),
            atomic=self.config.output.atomic_write,
        )
        run.rows_written = len(rows)
        run.output_path = str(path)
        return rows, path

    # ── Private helpers ───────────────────────────────────────────────────────

    @contextlib.contextmanager
    def _http_client(self) -> Iterator[httpx.Client]:
        if self.http is not None:
            yield self.http
            return
        with httpx.Client(timeout=self.config.http.timeout_seconds) as http:
            yield http

    def _transition(self, run: RunMetadata, state: PipelineState) -> None:
        logger.debug("%s -> %s", run.state, state.value)
        run.state = state.value

    def _fail(self, run: RunMetadata, exc: Exception) -> None:
        run.failed_state = run.state
        run.state = PipelineState.FAILED.value
        run.status = "failed"
        run.error_message = str(exc)
        run.finished_at = utcnow()
        logger.error(
            "Picklist run FAILED in [%s]: %s",
            run.failed_state, exc,
        )

    def _report(self, message: str) -> None:
        if self.progress is not None:
            self.progress(message)

    def _track(self, recipes: list[Recipe]) -> ContextManager[Iterable[Recipe]]:
        if self.track is None:
            return contextlib.nullcontext(recipes)
        return self.track(recipes)
