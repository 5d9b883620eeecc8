"""Pydantic models for feedback webhook payloads."""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field

from portion_advisor.domain.feedback import (
    FeedbackEvent,
    LeftoverRating,
    MealType,
    PortionRating,
)


class FeedbackEventPayload(BaseModel):
    """Feedback row as sent by the host app after it is stored."""

    id: str
    date: date
    meal_type: MealType
    recipe_id: str | None = None
    recipe_name: str | None = None
    portion_rating: PortionRating | None = None
    leftover_rating: LeftoverRating | None = None
    missing_ingredients: list[str] | None = None
    used_up_ingredients: list[str] | None = None
    notes: str | None = None
    created_at: datetime | None = Field(default=None)

    def to_event(self) -> FeedbackEvent:
        """Convert the payload into a domain event."""
        created_at = self.created_at or datetime.now(tz=UTC)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return FeedbackEvent(
            id=self.id,
            date=self.date,
            meal_type=self.meal_type,
            recipe_id=self.recipe_id,
            recipe_name=self.recipe_name,
            portion_rating=self.portion_rating,
            leftover_rating=self.leftover_rating,
            missing_ingredients=frozenset(self.missing_ingredients or []),
            used_up_ingredients=frozenset(self.used_up_ingredients or []),
            notes=(self.notes or "").strip(),
            created_at=created_at,
        )
