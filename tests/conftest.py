"""
Shared pytest fixtures for the recipe picklist test suite.

Provides:
  - ``app_config``: An ``AppConfig`` with filled credentials and test URLs.
  - ``credentials``: A matching ``Credentials`` instance.
  - ``fake_services``: A recording ``httpx.MockTransport`` that plays both the
    identity and planning services, with per-test configurable responses.
  - Sample recipe payloads / models.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generator

import httpx
import pytest

from recipe_picklist.config import AppConfig, AuthConfig, CredentialsConfig, PlanningConfig
from recipe_picklist.models.meta import Credentials
from recipe_picklist.models.recipe import Recipe

AUTH_BASE = "https://auth.test"
PLANNING_BASE = "https://planning.test"


# ── Config fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """AppConfig pointing at the fake services and writing into ``tmp_path``."""
    return AppConfig(
        auth=AuthConfig(base_url=AUTH_BASE),
        planning=PlanningConfig(base_url=PLANNING_BASE),
        output={"output_dir": str(tmp_path / "out")},
        credentials=CredentialsConfig(
            username="picker",
            password="hunter2",
            key="client-key",
            secret="client-secret",
            country="it",
        ),
    )


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        username="picker",
        password="hunter2",
        key="client-key",
        secret="client-secret",
        country="it",
    )


# ── Sample payloads ───────────────────────────────────────────────────────────

SOUP_PAYLOAD: dict = {
    "title": "Soup",
    "cskus": [
        {"code": "S1", "name": "Carrot", "servings_ratio": {"2": 1.5, "4": 3.0}},
    ],
}

CURRY_PAYLOAD: dict = {
    "title": "Curry",
    "cskus": [
        {
            "code": "C1",
            "name": "Rice",
            "servings_ratio": {"1": 0.5, "2": 1, "3": 1.25, "4": 2, "5": 2.5, "6": 3},
        },
        {"code": "C2", "name": "Curry paste", "servings_ratio": {}},
    ],
}


@pytest.fixture
def soup_recipe() -> Recipe:
    return Recipe.model_validate(SOUP_PAYLOAD)


@pytest.fixture
def curry_recipe() -> Recipe:
    return Recipe.model_validate(CURRY_PAYLOAD)


@pytest.fixture
def codes_file(tmp_path: Path) -> Path:
    path = tmp_path / "codes.csv"
    path.write_text("R1\nR2\n", encoding="utf-8")
    return path


# ── Fake HTTP services ────────────────────────────────────────────────────────

@dataclass
class FakeServices:
    """Recording stand-in for the identity and planning services.

    Tests adjust ``token_status``/``token_body`` and ``search_status``/
    ``search_body`` before running; every request is appended to ``requests``.
    """

    token_status: int = 200
    token_body: str = json.dumps({"access_token": "tok-123"})
    search_status: int = 200
    search_body: str = json.dumps({"recipes": [SOUP_PAYLOAD]})
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "auth.test" and request.url.path == "/token":
            return httpx.Response(self.token_status, text=self.token_body)
        if request.url.host == "planning.test" and request.url.path.endswith("/recipe/search"):
            return httpx.Response(self.search_status, text=self.search_body)
        return httpx.Response(404, text="not found")

    def calls_to(self, path_suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path_suffix)]


@pytest.fixture
def fake_services() -> FakeServices:
    return FakeServices()


@pytest.fixture
def http_client(fake_services: FakeServices) -> Generator[httpx.Client, None, None]:
    """An ``httpx.Client`` routed to ``fake_services``."""
    with httpx.Client(transport=httpx.MockTransport(fake_services.handler)) as client:
        yield client
