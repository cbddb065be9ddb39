"""
Base API client providing shared httpx request helpers.

All clients inherit from ``BaseApiClient`` and receive an ``httpx.Client``
at construction time. The client is assumed to be opened and closed by the
caller (the orchestrator opens one per run), which also lets tests inject
an ``httpx.MockTransport``.

Design:
  - One request per call, no retries.
  - Any non-2xx response raises the subclass's ``error_cls`` with the
    response body verbatim as the message.
  - Transport and decode failures are wrapped in the same ``error_cls``.
  - Clients speak Pydantic models, not raw dicts.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from recipe_picklist.errors import HttpResponseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseApiClient:
    """Shared request helpers for all service clients.

    Attributes:
        http: The active ``httpx.Client``.
        base_url: Service base URL without trailing slash.
    """

    error_cls: ClassVar[type[HttpResponseError]] = HttpResponseError

    def __init__(self, http: httpx.Client, base_url: str) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """POST to ``{base_url}{path}`` and return a successful response.

        Raises:
            error_cls: On transport failure or a non-success status.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.post(url, **kwargs)
        except httpx.HTTPError as exc:
            raise self.error_cls(f"Request to {url} failed: {exc}") from exc

        logger.debug("POST %s -> %d", url, resp.status_code)
        if not resp.is_success:
            raise self.error_cls(resp.text, status_code=resp.status_code)
        return resp

    def decode(self, resp: httpx.Response, model: type[ModelT]) -> ModelT:
        """Validate a JSON response body into ``model``.

        The error names the endpoint without its query string; the token
        request carries the password there.

        Raises:
            error_cls: If the body is not JSON or does not match ``model``.
        """
        try:
            return model.model_validate_json(resp.content)
        except ValidationError as exc:
            raise self.error_cls(
                f"Unexpected response from {_strip_query(resp.request.url)}: {exc}",
                status_code=resp.status_code,
            ) from exc


def _strip_query(url: httpx.URL) -> str:
    return str(url).split("?", 1)[0]
