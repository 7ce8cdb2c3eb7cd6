"""Tests for rating bracket classification."""

from __future__ import annotations

import pytest

from faceit_elo.tiers import classify
from faceit_elo.types import ColorTier


@pytest.mark.parametrize(
    ("rating", "tier"),
    [
        (-1, ColorTier.UNRANKED),
        (0, ColorTier.LOW),
        (1999, ColorTier.LOW),
        (2000, ColorTier.MID),
        (2750, ColorTier.MID),
        (2751, ColorTier.HIGH),
        (4200, ColorTier.HIGH),
    ],
)
def test_classify_boundaries(rating: int, tier: ColorTier) -> None:
    assert classify(rating) is tier


def test_classify_is_unranked_only_for_unknown() -> None:
    tiers = {classify(rating) for rating in range(0, 5000, 7)}
    assert ColorTier.UNRANKED not in tiers
    assert tiers == {ColorTier.LOW, ColorTier.MID, ColorTier.HIGH}


@pytest.mark.parametrize("rating", [-1, -5, -2000])
def test_negative_ratings_are_unranked(rating: int) -> None:
    assert classify(rating) is ColorTier.UNRANKED
