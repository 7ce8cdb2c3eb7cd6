"""Concurrent rating and statistics aggregation.

Every lookup in a cohort runs as its own task and owns its own HTTP session;
tasks share nothing while running and are joined with :func:`asyncio.gather`,
which hands results back in argument order regardless of completion order.
Any failure inside one task degrades that subject to ``N/A`` and never
reaches the rest of the cohort.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from . import faceit
from .config import PluginConfig, SamplePolicy
from .faceit.utils import parse_float
from .tiers import classify
from .types import (
    UNKNOWN_RATING,
    DetailResult,
    Group,
    LifetimeStats,
    NamedGroup,
    RatingResult,
    RecentMatch,
    RecentStats,
    Subject,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

RatingFetcher = Callable[[str, PluginConfig], Awaitable[int]]
AccountResolver = Callable[[str, PluginConfig], Awaitable[str | None]]
LifetimeFetcher = Callable[[str, PluginConfig], Awaitable[LifetimeStats | None]]
RecentFetcher = Callable[[str, PluginConfig, int], Awaitable[list[RecentMatch] | None]]


@dataclass(frozen=True, slots=True)
class LookupClients:
    """The remote lookups used by the aggregator; swapped out in tests."""

    fetch_rating: RatingFetcher = faceit.fetch_rating
    resolve_account_id: AccountResolver = faceit.resolve_account_id
    fetch_lifetime_stats: LifetimeFetcher = faceit.fetch_lifetime_stats
    fetch_recent_matches: RecentFetcher = faceit.fetch_recent_matches


def rating_result(display_name: str, rating: int) -> RatingResult:
    if rating == UNKNOWN_RATING:
        return RatingResult.unknown(display_name)
    return RatingResult(display_name, str(rating), classify(rating))


async def _isolated(
    call: Callable[[], Awaitable[_T]], fallback: _T, *, what: str, subject: Subject
) -> _T:
    try:
        return await call()
    except Exception as exc:
        logger.warning(
            "%s lookup for %s (%s) failed: %r",
            what,
            subject.display_name,
            subject.local_id,
            exc,
        )
        return fallback


async def _rate_subject(
    subject: Subject, config: PluginConfig, clients: LookupClients
) -> RatingResult:
    rating = await _isolated(
        lambda: clients.fetch_rating(subject.local_id, config),
        UNKNOWN_RATING,
        what="Rating",
        subject=subject,
    )
    return rating_result(subject.display_name, rating)


async def aggregate_group(
    subjects: Group,
    config: PluginConfig,
    clients: LookupClients | None = None,
) -> list[RatingResult]:
    """Look up every subject in parallel; the Nth result belongs to the Nth subject."""

    clients = clients or LookupClients()
    if not subjects:
        return []
    return list(
        await asyncio.gather(
            *(_rate_subject(subject, config, clients) for subject in subjects)
        )
    )


async def aggregate_groups(
    groups: Sequence[NamedGroup],
    config: PluginConfig,
    clients: LookupClients | None = None,
) -> list[tuple[NamedGroup, list[RatingResult]]]:
    """Aggregate several groups at once, keeping group order and in-group order."""

    results = await asyncio.gather(
        *(aggregate_group(group.subjects, config, clients) for group in groups)
    )
    return list(zip(groups, results, strict=True))


def _mean(values: Sequence[str], policy: SamplePolicy) -> float:
    parsed = [parse_float(value) for value in values]
    if policy == "exclude":
        usable = [number for number in parsed if number is not None]
        return sum(usable) / len(usable) if usable else 0.0
    if not parsed:
        return 0.0
    return sum(number or 0.0 for number in parsed) / len(parsed)


def summarize_recent(
    matches: Sequence[RecentMatch], policy: SamplePolicy = "zero"
) -> RecentStats:
    """Compute the win/loss tally and per-match averages.

    With the ``"zero"`` policy an unparseable sample counts as ``0`` and stays
    in the denominator; ``"exclude"`` leaves it out of that metric's mean.
    """

    total = len(matches)
    wins = sum(1 for match in matches if match.is_win)
    win_rate = round(wins / total * 100, 1) if total else 0.0
    return RecentStats(
        matches=total,
        wins=wins,
        losses=total - wins,
        win_rate=win_rate,
        avg_kd=_mean([match.kd_ratio for match in matches], policy),
        avg_headshot_pct=_mean([match.headshot_pct for match in matches], policy),
        avg_adr=_mean([match.adr for match in matches], policy),
    )


async def aggregate_detail(
    subject: Subject,
    config: PluginConfig,
    clients: LookupClients | None = None,
) -> DetailResult:
    """Resolve one subject's account, then fetch rating and stats concurrently."""

    clients = clients or LookupClients()
    account_id = await _isolated(
        lambda: clients.resolve_account_id(subject.local_id, config),
        None,
        what="Account",
        subject=subject,
    )
    if not account_id:
        return DetailResult(
            rating=RatingResult.unknown(subject.display_name), account_found=False
        )

    rating, lifetime, recent = await asyncio.gather(
        _rate_subject(subject, config, clients),
        _isolated(
            lambda: clients.fetch_lifetime_stats(account_id, config),
            None,
            what="Lifetime stats",
            subject=subject,
        ),
        _isolated(
            lambda: clients.fetch_recent_matches(
                account_id, config, config.recent_match_limit
            ),
            None,
            what="Recent matches",
            subject=subject,
        ),
    )
    recent_stats = (
        summarize_recent(recent, config.unparseable_samples)
        if recent is not None
        else None
    )
    return DetailResult(
        rating=rating, lifetime_stats=lifetime, recent_stats=recent_stats
    )


__all__ = [
    "LookupClients",
    "aggregate_detail",
    "aggregate_group",
    "aggregate_groups",
    "rating_result",
    "summarize_recent",
]
