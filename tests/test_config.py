"""Tests for config loading and API-key validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from faceit_elo.config import (
    API_KEY_ENV_VAR,
    FaceitConfigError,
    PluginConfig,
    describe_api_key_problem,
    has_valid_api_key,
    load_config,
    require_api_key,
)


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)


def test_missing_file_is_created_with_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "configs" / "FaceitEloPlugin.json"

    with caplog.at_level(logging.WARNING, logger="faceit_elo"):
        config = load_config(path)

    assert config == PluginConfig()
    written = json.loads(path.read_text(encoding="utf-8"))
    assert written["FaceitApiKey"] == "faceit-api-key-here"
    assert written["RequiredPermissions"] == ["@custom/faceit", "@css/root"]
    assert written["OutputVisibility"] == "self"
    assert written["RecentMatchLimit"] == 30
    assert any("New config file created" in r.getMessage() for r in caplog.records)


def test_existing_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "FaceitEloPlugin.json"
    path.write_text(
        json.dumps(
            {
                "DebugMode": True,
                "FaceitApiKey": "real-key",
                "RequiredPermissions": ["@css/admin"],
                "OutputVisibility": "all",
                "RecentMatchLimit": 20,
                "SomethingElse": 1,
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.debug_mode is True
    assert config.faceit_api_key == "real-key"
    assert config.required_permissions == ("@css/admin",)
    assert config.output_visibility == "all"
    assert config.recent_match_limit == 20
    assert config.unparseable_samples == "zero"


def test_legacy_single_permission(tmp_path: Path) -> None:
    path = tmp_path / "FaceitEloPlugin.json"
    legacy = {"RequiredPermission": "@custom/faceit"}
    path.write_text(json.dumps(legacy), encoding="utf-8")
    assert load_config(path).required_permissions == ("@custom/faceit",)


def test_invalid_file_falls_back_to_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "FaceitEloPlugin.json"
    path.write_text("{ not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="faceit_elo"):
        config = load_config(path)

    assert config == PluginConfig()
    assert path.read_text(encoding="utf-8") == "{ not json"
    assert any("Error loading config" in r.getMessage() for r in caplog.records)


def test_env_key_overrides_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "FaceitEloPlugin.json"
    path.write_text(json.dumps({"FaceitApiKey": "from-file"}), encoding="utf-8")

    monkeypatch.setenv(API_KEY_ENV_VAR, "from-env")
    assert load_config(path).faceit_api_key == "from-env"


def test_env_file_supplies_key(tmp_path: Path) -> None:
    path = tmp_path / "FaceitEloPlugin.json"
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nexport FACEIT_API_KEY='dotenv-key'\nOTHER=1 # trailing\n",
        encoding="utf-8",
    )
    assert load_config(path, env_file=env_file).faceit_api_key == "dotenv-key"


def test_api_key_validation() -> None:
    assert describe_api_key_problem(PluginConfig(faceit_api_key="")) is not None
    assert not has_valid_api_key(PluginConfig())
    placeholder = PluginConfig(faceit_api_key="placeholder-api-key-here")
    assert not has_valid_api_key(placeholder)
    assert has_valid_api_key(PluginConfig(faceit_api_key="abc"))
    assert require_api_key(PluginConfig(faceit_api_key=" abc ")) == "abc"
    with pytest.raises(FaceitConfigError):
        require_api_key(PluginConfig(faceit_api_key=""))


def test_config_is_read_only() -> None:
    config = PluginConfig()
    with pytest.raises(ValidationError):
        config.debug_mode = True  # type: ignore[misc]


def test_recent_match_limit_bounds() -> None:
    with pytest.raises(ValidationError):
        PluginConfig(recent_match_limit=0)
