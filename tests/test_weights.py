"""Tests for temporal feedback weights."""

from datetime import timedelta

from portion_advisor.services.weights import temporal_weight
from tests.conftest import NOW


def test_fresh_feedback_has_full_weight() -> None:
    assert temporal_weight(NOW, NOW) == 1.0


def test_weight_halves_after_half_life() -> None:
    weight = temporal_weight(NOW - timedelta(days=14), NOW)
    assert abs(weight - 0.5) < 1e-9


def test_weight_is_floored_before_expiry() -> None:
    weight = temporal_weight(NOW - timedelta(days=89), NOW)
    assert weight == 0.1


def test_expired_feedback_is_excluded() -> None:
    for days in (90.01, 91, 120, 365):
        assert temporal_weight(NOW - timedelta(days=days), NOW) == 0


def test_weight_is_non_increasing_with_age() -> None:
    weights = [
        temporal_weight(NOW - timedelta(days=days), NOW) for days in range(0, 95)
    ]
    assert all(later <= earlier for earlier, later in zip(weights, weights[1:]))


def test_future_timestamps_count_as_fresh() -> None:
    assert temporal_weight(NOW + timedelta(hours=2), NOW) == 1.0


def test_custom_policy_values() -> None:
    weight = temporal_weight(
        NOW - timedelta(days=7), NOW, half_life_days=7, min_weight=0.6
    )
    assert weight == 0.6
