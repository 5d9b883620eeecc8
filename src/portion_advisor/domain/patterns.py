"""Domain models for feedback pattern analysis."""

from dataclasses import dataclass, field
from enum import StrEnum

from portion_advisor.domain.feedback import MealType


class PortionRecommendation(StrEnum):
    """Direction suggested for recipe portions."""

    INCREASE = "increase"
    DECREASE = "decrease"
    NONE = "none"


class LeftoverRecommendation(StrEnum):
    """Action suggested by the leftover pattern."""

    REDUCE_PORTIONS = "reduce_portions"
    NONE = "none"


@dataclass
class RatioTally:
    """Weighted numerator/denominator pair."""

    good: float = 0.0
    total: float = 0.0

    @property
    def rate(self) -> float:
        return self.good / self.total if self.total > 0 else 0.0


@dataclass
class FeedbackTallies:
    """Weighted buckets produced by a single aggregation pass."""

    too_much: float = 0.0
    good: float = 0.0
    too_little: float = 0.0
    leftover_none: float = 0.0
    leftover_some: float = 0.0
    leftover_lots: float = 0.0
    missing: dict[str, float] = field(default_factory=dict)
    weekdays: list[RatioTally] = field(
        default_factory=lambda: [RatioTally() for _ in range(7)]
    )
    meal_types: dict[MealType, RatioTally] = field(
        default_factory=lambda: {meal_type: RatioTally() for meal_type in MealType}
    )
    total_weighted: float = 0.0
    event_count: int = 0


@dataclass(frozen=True)
class PortionPattern:
    """Portion rating distribution and its recommendation."""

    too_much: float
    good: float
    too_little: float
    confidence: float
    recommendation: PortionRecommendation
    suggested_change: int


@dataclass(frozen=True)
class LeftoverPattern:
    """Leftover rating distribution and its recommendation."""

    none: float
    some: float
    lots: float
    confidence: float
    recommendation: LeftoverRecommendation
    suggested_change: int


@dataclass(frozen=True)
class MissingIngredientsPattern:
    """Weighted missing-ingredient counts."""

    ingredients: dict[str, float]
    top_missing: list[str]


@dataclass(frozen=True)
class WeekdayPattern:
    """Weighted share of good portion ratings for a weekday (0 = Sunday)."""

    day_of_week: int
    average_rating: float


@dataclass(frozen=True)
class MealTypePattern:
    """Best-performing meal type for a recipe."""

    meal_type: MealType
    success_rate: float


@dataclass(frozen=True)
class PatternAnalysis:
    """Per-recipe analysis recomputed on demand."""

    recipe_id: str
    recipe_name: str
    portion: PortionPattern
    leftover: LeftoverPattern
    missing_ingredients: MissingIngredientsPattern
    weekdays: list[WeekdayPattern]
    meal_type_success: dict[MealType, float]
    best_meal_type: MealTypePattern
    total_weighted_feedbacks: float
