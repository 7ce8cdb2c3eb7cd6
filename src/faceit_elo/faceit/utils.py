"""Shared helpers for talking to the FACEIT Data API."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

import aiohttp

from ..types import NOT_AVAILABLE, StatValue

logger = logging.getLogger(__name__)

API_BASE_URL = "https://open.faceit.com/data/v4"
GAME_ID = "cs2"

PLAYER_TIMEOUT = 5.0
STATS_TIMEOUT = 10.0
DEBUG_BODY_LIMIT = 200


def truncate(value: str, max_length: int) -> str:
    """Shorten ``value`` to ``max_length`` characters, marking the cut with ``...``.

    Slicing works on code points, so multi-byte characters are never split.
    """
    if not value or len(value) <= max_length:
        return value
    return value[:max_length] + "..."


def player_url() -> str:
    return f"{API_BASE_URL}/players"


def lifetime_stats_url(account_id: str) -> str:
    return f"{API_BASE_URL}/players/{account_id}/stats/{GAME_ID}"


def match_history_url(account_id: str) -> str:
    return f"{API_BASE_URL}/players/{account_id}/games/{GAME_ID}/stats"


def create_session(api_key: str) -> aiohttp.ClientSession:
    """Open a session that carries the bearer credential on every request."""
    return aiohttp.ClientSession(headers={"Authorization": f"Bearer {api_key}"})


async def safe_close_session(session: aiohttp.ClientSession) -> None:
    await session.close()


async def get_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    params: Mapping[str, str] | None = None,
    timeout: float = PLAYER_TIMEOUT,
    debug: bool = False,
) -> Any | None:
    """GET ``url`` and decode the JSON body; ``None`` on any failure."""

    if debug:
        logger.debug("API request to: %s params=%s", url, dict(params or {}))
    try:
        async with session.get(
            url, params=params, timeout=aiohttp.ClientTimeout(total=timeout)
        ) as response:
            if not 200 <= response.status < 300:
                if debug:
                    logger.debug("API error: HTTP %s for %s", response.status, url)
                return None
            body = await response.text()
    except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as exc:
        if debug:
            logger.debug("API exception for %s: %r", url, exc)
        return None

    if debug:
        logger.debug("Received API response: %s", truncate(body, DEBUG_BODY_LIMIT))
    try:
        return json.loads(body)
    except ValueError as exc:
        if debug:
            logger.debug("Malformed API payload from %s: %s", url, exc)
        return None


def parse_float(value: StatValue) -> float | None:
    """Coerce an upstream stat to a finite float, or ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        try:
            number = float(value.strip().rstrip("%"))
        except (TypeError, ValueError):
            return None
    return number if math.isfinite(number) else None


def parse_int(value: StatValue) -> int | None:
    number = parse_float(value)
    return None if number is None else int(number)


def to_display(value: StatValue) -> str:
    if value is None:
        return NOT_AVAILABLE
    text = str(value).strip()
    return text or NOT_AVAILABLE


__all__ = [
    "API_BASE_URL",
    "DEBUG_BODY_LIMIT",
    "GAME_ID",
    "PLAYER_TIMEOUT",
    "STATS_TIMEOUT",
    "create_session",
    "get_json",
    "lifetime_stats_url",
    "match_history_url",
    "parse_float",
    "parse_int",
    "player_url",
    "safe_close_session",
    "to_display",
    "truncate",
]
