"""Text rendering of rating and detail results."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .types import (
    NOT_AVAILABLE,
    ColorTier,
    DetailResult,
    LifetimeStats,
    NamedGroup,
    RatingResult,
    RecentStats,
)

BANNER = "### FACEIT ELO RATINGS ###"
NO_RECENT_STATS = "Could not retrieve recent statistics."


@dataclass(frozen=True, slots=True)
class Palette:
    """Markup emitted before each kind of text; ``default`` resets it."""

    default: str
    header: str
    group: str
    name: str
    error: str
    unranked: str
    low: str
    mid: str
    high: str

    def tier(self, tier: ColorTier) -> str:
        return {
            ColorTier.UNRANKED: self.unranked,
            ColorTier.LOW: self.low,
            ColorTier.MID: self.mid,
            ColorTier.HIGH: self.high,
        }[tier]


# CS2 chat control characters.
CHAT = Palette(
    default="\x01",
    header="\x07",  # red
    group="\x10",  # orange
    name="\x04",  # green
    error="\x07",
    unranked="\x03",  # light purple
    low="\x01",  # white
    mid="\x0b",  # blue
    high="\x07",
)

ANSI = Palette(
    default="\033[0m",
    header="\033[1;31m",
    group="\033[33m",
    name="\033[32m",
    error="\033[31m",
    unranked="\033[35m",
    low="\033[37m",
    mid="\033[34m",
    high="\033[31m",
)

PLAIN = Palette("", "", "", "", "", "", "", "", "")


def format_banner(palette: Palette) -> str:
    return f" {palette.header}{BANNER}{palette.default}"


def format_group(
    name: str, results: Sequence[RatingResult], palette: Palette = CHAT
) -> list[str]:
    """One header line for the group, then ``name - rating`` per result."""
    lines = [f" {palette.group}=== {name} ==={palette.default}"]
    for result in results:
        lines.append(
            f"  {palette.name}{result.display_name}{palette.default} - "
            f"{palette.tier(result.color_tier)}{result.rating_text}{palette.default}"
        )
    return lines


def format_ratings_report(
    groups: Iterable[tuple[NamedGroup, Sequence[RatingResult]]],
    palette: Palette = CHAT,
) -> list[str]:
    lines = [format_banner(palette)]
    for group, results in groups:
        lines.extend(format_group(group.name, results, palette))
    return lines


def _percent(value: str) -> str:
    return value if value == NOT_AVAILABLE else f"{value}%"


def _results_sequence(results: Sequence[str]) -> str:
    if not results:
        return NOT_AVAILABLE
    symbols = {"1": "W", "0": "L"}
    return " ".join(symbols.get(item, "?") for item in results)


def _lifetime_lines(stats: LifetimeStats | None) -> list[str]:
    stats = stats or LifetimeStats()
    return [
        f"  Matches: {stats.matches}",
        f"  Win Rate: {_percent(stats.win_rate)}",
        f"  K/D: {stats.kd_ratio}",
        f"  Headshots: {_percent(stats.headshot_pct)}",
        f"  ADR: {stats.adr}",
        f"  Recent: {_results_sequence(stats.recent_results)}",
    ]


def _recent_lines(stats: RecentStats | None, palette: Palette) -> list[str]:
    if stats is None:
        return [f"  {palette.error}{NO_RECENT_STATS}{palette.default}"]
    return [
        f"  Last {stats.matches} matches: {stats.wins}W / {stats.losses}L "
        f"({stats.win_rate:.1f}%)",
        f"  Avg K/D: {stats.avg_kd:.2f}",
        f"  Avg HS: {stats.avg_headshot_pct:.1f}%",
        f"  Avg ADR: {stats.avg_adr:.1f}",
    ]


def format_detail(detail: DetailResult, palette: Palette = CHAT) -> list[str]:
    """Render a single player's rating, lifetime stats and recent form."""
    rating = detail.rating
    lines = [
        f" {palette.header}=== {rating.display_name} ==={palette.default}",
        f"  Elo: {palette.tier(rating.color_tier)}{rating.rating_text}"
        f"{palette.default}",
    ]
    if not detail.account_found:
        lines.append(
            f"  {palette.error}Could not find a FACEIT account for "
            f"{rating.display_name}.{palette.default}"
        )
        return lines

    lines.append(f" {palette.group}--- Lifetime ---{palette.default}")
    lines.extend(_lifetime_lines(detail.lifetime_stats))
    lines.append(f" {palette.group}--- Recent matches ---{palette.default}")
    lines.extend(_recent_lines(detail.recent_stats, palette))
    return lines


__all__ = [
    "ANSI",
    "BANNER",
    "CHAT",
    "NO_RECENT_STATS",
    "PLAIN",
    "Palette",
    "format_banner",
    "format_detail",
    "format_group",
    "format_ratings_report",
]
