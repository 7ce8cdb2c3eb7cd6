"""FACEIT Data API lookups: ratings, account ids and match statistics."""

from .players import fetch_player, fetch_rating, resolve_account_id
from .stats import fetch_lifetime_stats, fetch_recent_matches

__all__ = [
    "fetch_lifetime_stats",
    "fetch_player",
    "fetch_rating",
    "fetch_recent_matches",
    "resolve_account_id",
]
