"""Player lookups by Steam id: Elo rating and FACEIT account id."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..config import PluginConfig, has_valid_api_key
from ..types import UNKNOWN_RATING, PlayerPayload
from .utils import (
    GAME_ID,
    PLAYER_TIMEOUT,
    create_session,
    get_json,
    parse_int,
    player_url,
    safe_close_session,
)

logger = logging.getLogger(__name__)


async def fetch_player(local_id: str, config: PluginConfig) -> PlayerPayload | None:
    """Return the decoded player record for ``local_id``, or ``None``.

    No request is made for an empty id or an unusable API key.
    """

    if not local_id:
        return None
    if not has_valid_api_key(config):
        if config.debug_mode:
            logger.debug("API Error: No Faceit API key configured!")
        return None

    session = create_session(config.faceit_api_key.strip())
    try:
        data = await get_json(
            session,
            player_url(),
            params={"game": GAME_ID, "game_player_id": local_id},
            timeout=PLAYER_TIMEOUT,
            debug=config.debug_mode,
        )
    finally:
        await safe_close_session(session)

    if not isinstance(data, dict):
        return None
    try:
        return PlayerPayload.model_validate(data)
    except ValidationError as exc:
        if config.debug_mode:
            logger.debug("Unexpected player payload for %s: %s", local_id, exc)
        return None


async def fetch_rating(local_id: str, config: PluginConfig) -> int:
    """Return the CS2 Elo for ``local_id``; ``-1`` when it cannot be determined."""

    player = await fetch_player(local_id, config)
    if player is None or player.games is None or player.games.cs2 is None:
        return UNKNOWN_RATING
    elo = parse_int(player.games.cs2.faceit_elo)
    if elo is None or elo < 0:
        return UNKNOWN_RATING
    return elo


async def resolve_account_id(local_id: str, config: PluginConfig) -> str | None:
    """Map a Steam id to the FACEIT ``player_id`` of the linked account."""

    player = await fetch_player(local_id, config)
    if player is None or not player.player_id:
        return None
    return player.player_id


__all__ = ["fetch_player", "fetch_rating", "resolve_account_id"]
