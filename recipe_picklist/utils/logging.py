"""
Logging for picklist runs.

``configure_logging(config)`` is called once by the CLI. Library modules only
ever use ``logging.getLogger(__name__)``.

Each handler carries two filters:
  - ``RunSlugFilter`` stamps ``record.run_slug`` with the run in progress,
    as set by ``run_context()`` in the orchestrator (``-`` outside a run).
    A ``run_slug`` passed via ``extra=`` is left alone.
  - ``SecretRedactingFilter`` masks ``password``/``secret``/``access_token``
    query values and ``Bearer`` tokens in the rendered message. The token
    request sends the password in its query string, and httpx logs request
    URLs once the level is DEBUG.

Text lines::

    2026-10-18T09:00:00Z [INFO] recipe_picklist.clients.auth_client [01J9…]: Access token obtained for country=it

JSON lines (``json_format = true``)::

    {"ts": "...", "level": "INFO", "logger": "...", "run_slug": "01J9…", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recipe_picklist.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(run_slug)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NO_RUN = "-"

_current_run: ContextVar[str] = ContextVar("picklist_run_slug", default=NO_RUN)

_SECRET_PARAM = re.compile(r"(?i)\b(password|secret|access_token)=([^&\s\"']+)")
_BEARER = re.compile(r"(?i)\bBearer\s+[^\s\"']+")


@contextmanager
def run_context(run_slug: str) -> Iterator[None]:
    """Tag every record logged inside the block with ``run_slug``."""
    token = _current_run.set(run_slug)
    try:
        yield
    finally:
        _current_run.reset(token)


def redact_secrets(text: str) -> str:
    """Mask credential query values and bearer tokens in ``text``."""
    text = _SECRET_PARAM.sub(r"\1=***", text)
    return _BEARER.sub("Bearer ***", text)


class RunSlugFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_slug"):
            record.run_slug = _current_run.get()
        return True


class SecretRedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "run_slug": getattr(record, "run_slug", NO_RUN),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = redact_secrets(self.formatException(record.exc_info))
        return json.dumps(payload, default=str)


def _make_handler(
    handler: logging.Handler, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RunSlugFilter())
    handler.addFilter(SecretRedactingFilter())
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from the ``[logging]`` config section.

    Console output goes to stderr; stdout is left to the CLI's own messages
    (status lines and the generated file name). A file handler is added when
    ``config.log_file`` is set.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = [_make_handler(logging.StreamHandler(sys.stderr), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _make_handler(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # httpx request lines only at DEBUG; they pass through the redacting filter
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(transport_level)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
