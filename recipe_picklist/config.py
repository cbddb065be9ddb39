"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — local overrides and ``[credentials]`` (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``RECIPE_PICKLIST_*`` prefix

Entry points:
  ``load_config(config_path=None) -> AppConfig``
  ``load_credentials(config) -> Credentials``

The CLI and the orchestrator receive an ``AppConfig`` instance — never raw
dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from recipe_picklist.errors import ConfigurationError
from recipe_picklist.models.meta import Credentials

# ── Sub-config models ─────────────────────────────────────────────────────────


class AuthConfig(BaseModel):
    """Identity service settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://auth-service.live-k8s.hellofresh.io"


class PlanningConfig(BaseModel):
    """Culinary planning service settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "https://culinary-planning-service.live-k8s.hellofresh.io"
    default_market: str = "it"
    expand: str = "skus"

    @field_validator("default_market")
    @classmethod
    def validate_market(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("default_market must not be empty.")
        return v


class HttpConfig(BaseModel):
    """Transport settings shared by both API clients."""

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = 30.0

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Input parsing and picklist output settings."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "."
    atomic_write: bool = False
    input_delimiter: str = ","

    @field_validator("input_delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"input_delimiter must be a single character, got {v!r}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class CredentialsConfig(BaseModel):
    """Raw credential fields as read from local.toml / environment.

    Every field may be blank here; ``load_credentials()`` is where
    completeness is enforced, so ``validate-config`` works without secrets.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""
    key: str = ""
    secret: str = ""
    country: str = ""

    def __repr__(self) -> str:
        # Never leak secrets through logs or tracebacks.
        filled = [name for name, val in self.model_dump().items() if val]
        return f"CredentialsConfig(filled={filled})"

    __str__ = __repr__


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    auth: AuthConfig = AuthConfig()
    planning: PlanningConfig = PlanningConfig()
    http: HttpConfig = HttpConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent

# env var → (section, key)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "RECIPE_PICKLIST_USERNAME":   ("credentials", "username"),
    "RECIPE_PICKLIST_PASSWORD":   ("credentials", "password"),
    "RECIPE_PICKLIST_KEY":        ("credentials", "key"),
    "RECIPE_PICKLIST_SECRET":     ("credentials", "secret"),
    "RECIPE_PICKLIST_COUNTRY":    ("credentials", "country"),
    "RECIPE_PICKLIST_LOG_LEVEL":  ("logging", "level"),
    "RECIPE_PICKLIST_OUTPUT_DIR": ("output", "output_dir"),
    "RECIPE_PICKLIST_MARKET":     ("planning", "default_market"),
}


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def _default_config_path(root: Path) -> Path:
    """Prefer ``./config/default.toml`` in the working directory, then the project's."""
    cwd_candidate = Path.cwd() / "config" / "default.toml"
    if cwd_candidate.exists():
        return cwd_candidate
    return root / "config" / "default.toml"


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``config/default.toml`` in the working directory or project root.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        ConfigurationError: If the config file is missing, is not valid TOML,
            or merged values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = _default_config_path(root)

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(config_path)

    # Also merge local.toml if present (gitignored local overrides + credentials)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply RECIPE_PICKLIST_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    try:
        return _build_app_config(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Config validation failed: {exc}") from exc


def load_credentials(config: AppConfig) -> Credentials:
    """Build immutable ``Credentials`` from the merged configuration.

    Raises:
        ConfigurationError: If any credential field is blank.
    """
    creds = config.credentials
    missing = [name for name, val in creds.model_dump().items() if not val.strip()]
    if missing:
        raise ConfigurationError(
            f"Missing credentials: {', '.join(missing)}. "
            "Set them in config/local.toml [credentials] or RECIPE_PICKLIST_* env vars."
        )
    return Credentials(
        username=creds.username,
        password=creds.password,
        key=creds.key,
        secret=creds.secret,
        country=creds.country,
    )


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ``RECIPE_PICKLIST_*`` env vars to the raw config dict."""
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        if value := os.environ.get(env_name):
            raw.setdefault(section, {})[key] = value
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        auth=AuthConfig(**raw.get("auth", {})),
        planning=PlanningConfig(**raw.get("planning", {})),
        http=HttpConfig(**raw.get("http", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        credentials=CredentialsConfig(**raw.get("credentials", {})),
    )
