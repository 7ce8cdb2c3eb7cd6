"""Plugin configuration: file loading, env overrides and key validation."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "FaceitEloPlugin.json"
PLACEHOLDER_API_KEYS = frozenset({"faceit-api-key-here", "placeholder-api-key-here"})
API_KEY_ENV_VAR = "FACEIT_API_KEY"

Visibility = Literal["self", "admin", "all"]
SamplePolicy = Literal["zero", "exclude"]


class FaceitConfigError(RuntimeError):
    """Raised when the configuration cannot be used for lookups."""


class PluginConfig(BaseModel):
    """Read-only settings shared by every component of one process."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    debug_mode: bool = Field(default=False, alias="DebugMode")
    faceit_api_key: str = Field(default="faceit-api-key-here", alias="FaceitApiKey")
    required_permissions: tuple[str, ...] = Field(
        default=("@custom/faceit", "@css/root"),
        alias="RequiredPermissions",
    )
    admin_permission: str = Field(default="@css/admin", alias="AdminPermission")
    output_visibility: Visibility = Field(default="self", alias="OutputVisibility")
    recent_match_limit: int = Field(
        default=30, ge=1, le=100, alias="RecentMatchLimit"
    )
    unparseable_samples: SamplePolicy = Field(
        default="zero", alias="UnparseableSamples"
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_permission(cls, data: Any) -> Any:
        # Older config files carried a single "RequiredPermission" token.
        if isinstance(data, dict) and "RequiredPermission" in data:
            data = dict(data)
            legacy = data.pop("RequiredPermission")
            if "RequiredPermissions" not in data and "required_permissions" not in data:
                data["RequiredPermissions"] = (legacy,) if legacy else ()
        return data


def describe_api_key_problem(config: PluginConfig) -> str | None:
    """Return an operator-facing description of a bad API key, if any."""
    key = config.faceit_api_key.strip()
    if not key:
        return "Faceit API key is missing in config!"
    if key in PLACEHOLDER_API_KEYS:
        return "Default Faceit API key detected! Please configure your Faceit API key."
    return None


def has_valid_api_key(config: PluginConfig) -> bool:
    return describe_api_key_problem(config) is None


def require_api_key(config: PluginConfig) -> str:
    problem = describe_api_key_problem(config)
    if problem is not None:
        raise FaceitConfigError(problem)
    return config.faceit_api_key.strip()


def _load_env_file(path: Path) -> dict[str, str]:
    """Parse simple KEY=VALUE pairs from an ``.env`` file."""

    try:
        raw_lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return {}

    values: dict[str, str] = {}
    for raw_line in raw_lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if value and value[0] in {'"', "'"} and value[-1] == value[0]:
            value = value[1:-1]
        else:
            value = value.split(" #", 1)[0].rstrip()

        values[key] = value
    return values


def _resolve_env_api_key(env_file: Path | None) -> str | None:
    key = os.environ.get(API_KEY_ENV_VAR)
    if key:
        return key
    if env_file is not None:
        return _load_env_file(env_file).get(API_KEY_ENV_VAR) or None
    return None


def _write_default(path: Path, config: PluginConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(by_alias=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def load_config(path: Path, *, env_file: Path | None = None) -> PluginConfig:
    """Load the plugin config from ``path``.

    A missing file is created with default values. An unreadable or invalid
    file is logged and replaced by defaults in memory (the file is left
    untouched). ``FACEIT_API_KEY`` from the environment, or from ``env_file``,
    overrides the key stored in the file.
    """

    config = PluginConfig()
    if not path.exists():
        try:
            _write_default(path, config)
        except OSError as exc:
            logger.error("Error writing default config to %s: %s", path, exc)
        else:
            logger.warning(
                "New config file created at %s! Please configure your Faceit API key.",
                path,
            )
    else:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            config = PluginConfig.model_validate(raw)
            logger.debug("Loaded config from %s", path)
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Error loading config %s: %s", path, exc)
            config = PluginConfig()

    env_key = _resolve_env_api_key(env_file)
    if env_key:
        config = config.model_copy(update={"faceit_api_key": env_key})

    problem = describe_api_key_problem(config)
    if problem is not None:
        if config.faceit_api_key.strip():
            logger.warning(problem)
        else:
            logger.error("CRITICAL ERROR: %s", problem)
    return config


__all__ = [
    "API_KEY_ENV_VAR",
    "CONFIG_FILE_NAME",
    "PLACEHOLDER_API_KEYS",
    "FaceitConfigError",
    "PluginConfig",
    "SamplePolicy",
    "Visibility",
    "describe_api_key_problem",
    "has_valid_api_key",
    "load_config",
    "require_api_key",
]
