"""Feedback loading and weighted aggregation."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from portion_advisor.domain.feedback import (
    FeedbackEvent,
    LeftoverRating,
    PortionRating,
    WeightedFeedback,
)
from portion_advisor.domain.patterns import FeedbackTallies
from portion_advisor.domain.policy import LearningPolicy
from portion_advisor.services.weights import age_in_days, temporal_weight

_logger = logging.getLogger(__name__)


class FeedbackRepository(Protocol):
    """Read-only access to stored feedback events."""

    def list_feedback(self, recipe_id: str | None, limit: int) -> list[FeedbackEvent]:
        """Return the most recent events, newest first."""

    def list_recipe_ids(self) -> list[str]:
        """Return ids of every recipe that has received feedback."""

    def count_feedback(self) -> int:
        """Return the total number of stored feedback events."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FeedbackAggregator:
    """Loads feedback with temporal weights and tallies it."""

    repository: FeedbackRepository
    policy: LearningPolicy = field(default_factory=LearningPolicy)
    clock: Callable[[], datetime] = _utc_now

    async def load_weighted(
        self, recipe_id: str | None = None
    ) -> list[WeightedFeedback]:
        """Return recent feedback with non-zero weights."""
        events = await asyncio.to_thread(
            self.repository.list_feedback, recipe_id, self.policy.feedback_window
        )
        weighted = weigh_events(events, self.clock(), self.policy)
        _logger.debug(
            "Loaded feedback: recipe_id=%s events=%s weighted=%s",
            recipe_id,
            len(events),
            len(weighted),
        )
        return weighted

    async def list_recipe_ids(self) -> list[str]:
        """Return recipes that have received feedback."""
        return await asyncio.to_thread(self.repository.list_recipe_ids)


def weigh_events(
    events: list[FeedbackEvent], now: datetime, policy: LearningPolicy
) -> list[WeightedFeedback]:
    """Attach decay weights to events and drop expired ones."""
    weighted: list[WeightedFeedback] = []
    for event in events:
        weight = temporal_weight(
            event.created_at,
            now,
            half_life_days=policy.half_life_days,
            min_weight=policy.min_weight,
            max_age_days=policy.max_age_days,
        )
        if weight <= 0:
            continue
        weighted.append(
            WeightedFeedback(
                event=event,
                weight=weight,
                age_days=int(age_in_days(event.created_at, now)),
            )
        )
    return weighted


def aggregate(weighted: list[WeightedFeedback]) -> FeedbackTallies:
    """Sum weights into rating buckets in a single pass."""
    tallies = FeedbackTallies()
    for entry in weighted:
        event = entry.event
        weight = entry.weight
        tallies.total_weighted += weight
        tallies.event_count += 1

        if event.portion_rating == PortionRating.TOO_MUCH:
            tallies.too_much += weight
        elif event.portion_rating == PortionRating.GOOD:
            tallies.good += weight
        elif event.portion_rating == PortionRating.TOO_LITTLE:
            tallies.too_little += weight

        if event.leftover_rating == LeftoverRating.NONE:
            tallies.leftover_none += weight
        elif event.leftover_rating == LeftoverRating.SOME:
            tallies.leftover_some += weight
        elif event.leftover_rating == LeftoverRating.LOTS:
            tallies.leftover_lots += weight

        for ingredient in event.missing_ingredients:
            tallies.missing[ingredient] = tallies.missing.get(ingredient, 0.0) + weight

        # Sunday is day 0.
        weekday = tallies.weekdays[(event.date.weekday() + 1) % 7]
        weekday.total += weight
        if event.portion_rating == PortionRating.GOOD:
            weekday.good += weight

        meal = tallies.meal_types.get(event.meal_type)
        if meal is not None:
            meal.total += weight
            if (
                event.portion_rating == PortionRating.GOOD
                and event.leftover_rating != LeftoverRating.LOTS
            ):
                meal.good += weight
    return tallies
