"""Learning policy constants for feedback analysis."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LearningPolicy:
    """Thresholds and decay constants used by the analyzer.

    Passed explicitly into the aggregator and analyzer so alternate policies
    can be tested without touching module state.
    """

    half_life_days: float = 14.0
    min_weight: float = 0.1
    max_age_days: float = 90.0
    feedback_window: int = 200
    min_weighted_count: float = 1.5
    portion_confidence_threshold: float = 0.65
    portion_change_scale: int = 30
    portion_change_cap: int = 25
    leftover_confidence_threshold: float = 0.4
    leftover_change_scale: int = 25
    leftover_change_cap: int = 20
    missing_min_weight: float = 0.5
    missing_top_n: int = 3
    default_market_change: int = -20
    insights_full_confidence_count: int = 50
