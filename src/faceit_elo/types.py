"""Shared type definitions for the Elo lookup pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Roster
# =============================================================================


@dataclass(frozen=True, slots=True)
class Subject:
    """Snapshot of one roster entrant taken when a command starts.

    The player behind it may disconnect at any moment; nothing downstream may
    assume the snapshot still refers to a live player.
    """

    display_name: str
    local_id: str


Group = Sequence[Subject]


@dataclass(frozen=True, slots=True)
class NamedGroup:
    """A display-ordered group of subjects, e.g. one team."""

    name: str
    subjects: tuple[Subject, ...]


# =============================================================================
# Results
# =============================================================================


class ColorTier(Enum):
    """Display emphasis bracket for a rating."""

    UNRANKED = "unranked"
    LOW = "low"
    MID = "mid"
    HIGH = "high"


NOT_AVAILABLE = "N/A"
UNKNOWN_RATING = -1


@dataclass(frozen=True, slots=True)
class RatingResult:
    """Display-ready rating for one subject."""

    display_name: str
    rating_text: str
    color_tier: ColorTier

    @classmethod
    def unknown(cls, display_name: str) -> RatingResult:
        return cls(display_name, NOT_AVAILABLE, ColorTier.UNRANKED)


@dataclass(frozen=True, slots=True)
class LifetimeStats:
    """Lifetime aggregates, kept as display strings."""

    matches: str = NOT_AVAILABLE
    win_rate: str = NOT_AVAILABLE
    kd_ratio: str = NOT_AVAILABLE
    headshot_pct: str = NOT_AVAILABLE
    adr: str = NOT_AVAILABLE
    recent_results: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RecentMatch:
    """One entry of the recent-match window, as reported upstream."""

    kd_ratio: str = NOT_AVAILABLE
    result: str = NOT_AVAILABLE
    headshot_pct: str = NOT_AVAILABLE
    adr: str = NOT_AVAILABLE

    @property
    def is_win(self) -> bool:
        return self.result.strip() == "1"


@dataclass(frozen=True, slots=True)
class RecentStats:
    """Aggregates computed over the recent-match window."""

    matches: int
    wins: int
    losses: int
    win_rate: float
    avg_kd: float
    avg_headshot_pct: float
    avg_adr: float


@dataclass(frozen=True, slots=True)
class DetailResult:
    """Outcome of a single-subject detail lookup.

    ``account_found`` is false when no FACEIT account is linked; in that case
    both stats fields are ``None`` and the rating is unknown.
    """

    rating: RatingResult
    account_found: bool = True
    lifetime_stats: LifetimeStats | None = None
    recent_stats: RecentStats | None = None


# =============================================================================
# Remote payloads (Pydantic)
# =============================================================================

# Upstream mixes numbers and strings for the same field across endpoints.
StatValue = str | int | float | None


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GamePayload(_Payload):
    faceit_elo: StatValue = None


class GamesPayload(_Payload):
    cs2: GamePayload | None = None


class PlayerPayload(_Payload):
    """Response of ``/players?game=cs2&game_player_id=...``."""

    player_id: str | None = None
    nickname: str | None = None
    games: GamesPayload | None = None


class LifetimePayload(_Payload):
    matches: StatValue = Field(default=None, alias="Matches")
    win_rate: StatValue = Field(default=None, alias="Win Rate %")
    kd_ratio: StatValue = Field(default=None, alias="Average K/D Ratio")
    headshot_pct: StatValue = Field(default=None, alias="Average Headshots %")
    adr: StatValue = Field(default=None, alias="ADR")
    recent_results: list[StatValue] | None = Field(
        default=None, alias="Recent Results"
    )


class PlayerStatsPayload(_Payload):
    """Response of ``/players/{id}/stats/cs2``."""

    lifetime: LifetimePayload | None = None


class MatchStatsPayload(_Payload):
    kd_ratio: StatValue = Field(default=None, alias="K/D Ratio")
    result: StatValue = Field(default=None, alias="Result")
    headshot_pct: StatValue = Field(default=None, alias="Headshots %")
    adr: StatValue = Field(default=None, alias="ADR")


class MatchItemPayload(_Payload):
    stats: MatchStatsPayload | None = None


class MatchHistoryPayload(_Payload):
    """Response of ``/players/{id}/games/cs2/stats?limit=...``."""

    items: list[MatchItemPayload] | None = None


__all__ = [
    "NOT_AVAILABLE",
    "UNKNOWN_RATING",
    "ColorTier",
    "DetailResult",
    "GamePayload",
    "GamesPayload",
    "Group",
    "LifetimePayload",
    "LifetimeStats",
    "MatchHistoryPayload",
    "MatchItemPayload",
    "MatchStatsPayload",
    "NamedGroup",
    "PlayerPayload",
    "PlayerStatsPayload",
    "RatingResult",
    "RecentMatch",
    "RecentStats",
    "StatValue",
    "Subject",
]
