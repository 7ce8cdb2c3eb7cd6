"""Lifetime and recent-match statistics for a resolved FACEIT account."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import PluginConfig, has_valid_api_key
from ..types import (
    LifetimeStats,
    MatchHistoryPayload,
    PlayerStatsPayload,
    RecentMatch,
)
from .utils import (
    STATS_TIMEOUT,
    create_session,
    get_json,
    lifetime_stats_url,
    match_history_url,
    safe_close_session,
    to_display,
)

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 30

_ModelT = TypeVar("_ModelT", bound=BaseModel)


async def _fetch_model(
    url: str,
    model: type[_ModelT],
    config: PluginConfig,
    *,
    params: Mapping[str, str] | None = None,
) -> _ModelT | None:
    if not has_valid_api_key(config):
        return None

    session = create_session(config.faceit_api_key.strip())
    try:
        data: Any = await get_json(
            session,
            url,
            params=params,
            timeout=STATS_TIMEOUT,
            debug=config.debug_mode,
        )
    finally:
        await safe_close_session(session)

    if not isinstance(data, dict):
        return None
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        if config.debug_mode:
            logger.debug("Unexpected %s payload from %s: %s", model.__name__, url, exc)
        return None


async def fetch_lifetime_stats(
    account_id: str, config: PluginConfig
) -> LifetimeStats | None:
    """Return lifetime aggregates, or ``None`` if they could not be fetched."""

    if not account_id:
        return None
    payload = await _fetch_model(
        lifetime_stats_url(account_id), PlayerStatsPayload, config
    )
    if payload is None or payload.lifetime is None:
        return None

    lifetime = payload.lifetime
    return LifetimeStats(
        matches=to_display(lifetime.matches),
        win_rate=to_display(lifetime.win_rate),
        kd_ratio=to_display(lifetime.kd_ratio),
        headshot_pct=to_display(lifetime.headshot_pct),
        adr=to_display(lifetime.adr),
        recent_results=tuple(
            to_display(item) for item in lifetime.recent_results or []
        ),
    )


async def fetch_recent_matches(
    account_id: str, config: PluginConfig, limit: int = DEFAULT_RECENT_LIMIT
) -> list[RecentMatch] | None:
    """Return up to ``limit`` recent matches, newest first.

    ``None`` means the fetch failed; an empty list is a successful fetch for a
    player without recent matches.
    """

    if not account_id:
        return None
    payload = await _fetch_model(
        match_history_url(account_id),
        MatchHistoryPayload,
        config,
        params={"limit": str(max(1, limit))},
    )
    if payload is None or payload.items is None:
        return None

    matches: list[RecentMatch] = []
    for item in payload.items[:limit]:
        if item.stats is None:
            # Keep the slot so it still counts toward the window.
            matches.append(RecentMatch())
            continue
        matches.append(
            RecentMatch(
                kd_ratio=to_display(item.stats.kd_ratio),
                result=to_display(item.stats.result),
                headshot_pct=to_display(item.stats.headshot_pct),
                adr=to_display(item.stats.adr),
            )
        )
    return matches


__all__ = ["DEFAULT_RECENT_LIMIT", "fetch_lifetime_stats", "fetch_recent_matches"]
