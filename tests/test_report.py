"""Tests for the text formatter."""

from __future__ import annotations

from faceit_elo.report import (
    CHAT,
    NO_RECENT_STATS,
    PLAIN,
    format_detail,
    format_group,
    format_ratings_report,
)
from faceit_elo.types import (
    ColorTier,
    DetailResult,
    LifetimeStats,
    NamedGroup,
    RatingResult,
    RecentStats,
)


def test_format_group_plain() -> None:
    lines = format_group(
        "TERRORISTS",
        [
            RatingResult("Alice", "2800", ColorTier.HIGH),
            RatingResult("Bob", "N/A", ColorTier.UNRANKED),
        ],
        PLAIN,
    )
    assert lines == [" === TERRORISTS ===", "  Alice - 2800", "  Bob - N/A"]


def test_format_group_colors_ratings_by_tier() -> None:
    lines = format_group(
        "CT",
        [
            RatingResult("low", "1500", ColorTier.LOW),
            RatingResult("mid", "2750", ColorTier.MID),
            RatingResult("high", "3000", ColorTier.HIGH),
            RatingResult("none", "N/A", ColorTier.UNRANKED),
        ],
        CHAT,
    )
    assert lines[0] == f" {CHAT.group}=== CT ==={CHAT.default}"
    assert f"{CHAT.low}1500{CHAT.default}" in lines[1]
    assert f"{CHAT.mid}2750{CHAT.default}" in lines[2]
    assert f"{CHAT.high}3000{CHAT.default}" in lines[3]
    assert f"{CHAT.unranked}N/A{CHAT.default}" in lines[4]
    assert lines[1].startswith(f"  {CHAT.name}low{CHAT.default} - ")


def test_format_ratings_report_keeps_group_order() -> None:
    lines = format_ratings_report(
        [
            (NamedGroup("TERRORISTS", ()), [RatingResult("a", "1", ColorTier.LOW)]),
            (NamedGroup("COUNTER-TERRORISTS", ()), []),
        ],
        PLAIN,
    )
    assert lines == [
        " ### FACEIT ELO RATINGS ###",
        " === TERRORISTS ===",
        "  a - 1",
        " === COUNTER-TERRORISTS ===",
    ]


def test_format_detail_full() -> None:
    detail = DetailResult(
        rating=RatingResult("Alice", "2450", ColorTier.MID),
        lifetime_stats=LifetimeStats(
            matches="812",
            win_rate="54",
            kd_ratio="1.21",
            headshot_pct="49",
            adr="84.3",
            recent_results=("1", "0", "1"),
        ),
        recent_stats=RecentStats(
            matches=30,
            wins=17,
            losses=13,
            win_rate=56.7,
            avg_kd=1.16667,
            avg_headshot_pct=47.25,
            avg_adr=81.04,
        ),
    )

    assert format_detail(detail, PLAIN) == [
        " === Alice ===",
        "  Elo: 2450",
        " --- Lifetime ---",
        "  Matches: 812",
        "  Win Rate: 54%",
        "  K/D: 1.21",
        "  Headshots: 49%",
        "  ADR: 84.3",
        "  Recent: W L W",
        " --- Recent matches ---",
        "  Last 30 matches: 17W / 13L (56.7%)",
        "  Avg K/D: 1.17",
        "  Avg HS: 47.2%",
        "  Avg ADR: 81.0",
    ]


def test_format_detail_missing_sections() -> None:
    detail = DetailResult(rating=RatingResult("Bob", "1800", ColorTier.LOW))

    lines = format_detail(detail, PLAIN)

    assert "  Matches: N/A" in lines
    assert "  Win Rate: N/A" in lines
    assert "  Recent: N/A" in lines
    assert lines[-1] == f"  {NO_RECENT_STATS}"


def test_format_detail_without_account() -> None:
    detail = DetailResult(
        rating=RatingResult("Carol", "N/A", ColorTier.UNRANKED), account_found=False
    )
    assert format_detail(detail, PLAIN) == [
        " === Carol ===",
        "  Elo: N/A",
        "  Could not find a FACEIT account for Carol.",
    ]
