"""Domain models for meal feedback."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class MealType(StrEnum):
    """Meal slot a feedback event refers to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class PortionRating(StrEnum):
    """How the portion size felt."""

    TOO_LITTLE = "poca"
    GOOD = "bien"
    TOO_MUCH = "mucha"


class LeftoverRating(StrEnum):
    """How much food was left over."""

    NONE = "nada"
    SOME = "poco"
    LOTS = "mucho"


@dataclass(frozen=True)
class FeedbackEvent:
    """Feedback recorded after a meal. Never mutated once stored."""

    id: str
    date: date
    meal_type: MealType
    recipe_id: str | None
    recipe_name: str | None
    portion_rating: PortionRating | None
    leftover_rating: LeftoverRating | None
    created_at: datetime
    missing_ingredients: frozenset[str] = field(default_factory=frozenset)
    used_up_ingredients: frozenset[str] = field(default_factory=frozenset)
    notes: str = ""


@dataclass(frozen=True)
class WeightedFeedback:
    """Feedback event paired with its temporal weight."""

    event: FeedbackEvent
    weight: float
    age_days: int
