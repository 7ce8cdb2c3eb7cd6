"""Rating bracket classification."""

from __future__ import annotations

from .types import UNKNOWN_RATING, ColorTier

LOW_CEILING = 2000  # exclusive
MID_CEILING = 2750  # inclusive


def classify(rating: int) -> ColorTier:
    """Return the display tier for ``rating``; any negative value is unknown."""
    if rating <= UNKNOWN_RATING:
        return ColorTier.UNRANKED
    if rating < LOW_CEILING:
        return ColorTier.LOW
    if rating <= MID_CEILING:
        return ColorTier.MID
    return ColorTier.HIGH


__all__ = ["LOW_CEILING", "MID_CEILING", "classify"]
