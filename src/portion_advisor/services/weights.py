"""Temporal decay weights for feedback events."""

from datetime import datetime

_SECONDS_PER_DAY = 86400.0


def age_in_days(created_at: datetime, now: datetime) -> float:
    """Return the fractional age in days, clamped at zero."""
    return max(0.0, (now - created_at).total_seconds() / _SECONDS_PER_DAY)


def temporal_weight(
    created_at: datetime,
    now: datetime,
    half_life_days: float = 14.0,
    min_weight: float = 0.1,
    max_age_days: float = 90.0,
) -> float:
    """Return the decay weight for a feedback event.

    Events older than ``max_age_days`` get weight 0 and are excluded.
    Otherwise the weight halves every ``half_life_days`` but never drops
    below ``min_weight``.
    """
    age_days = age_in_days(created_at, now)
    if age_days > max_age_days:
        return 0.0
    return max(min_weight, 0.5 ** (age_days / half_life_days))
