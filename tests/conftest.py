"""Shared fixtures."""

from __future__ import annotations

import pytest

from faceit_elo.config import PluginConfig


@pytest.fixture
def config() -> PluginConfig:
    return PluginConfig(faceit_api_key="test-key", required_permissions=[])
