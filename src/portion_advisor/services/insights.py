"""Summary of the engine's learning state."""

import asyncio
from dataclasses import dataclass, field

from portion_advisor.domain.policy import LearningPolicy
from portion_advisor.domain.suggestions import LearningInsights
from portion_advisor.services.aggregation import FeedbackRepository
from portion_advisor.services.suggestions import SuggestionRepository

_TOP_RECIPES = 3


@dataclass
class InsightsService:
    """Builds learning insights for dashboards."""

    feedback_repository: FeedbackRepository
    suggestion_repository: SuggestionRepository
    policy: LearningPolicy = field(default_factory=LearningPolicy)

    async def summary(self) -> LearningInsights:
        """Return feedback volume, open patterns and overall confidence."""
        total = await asyncio.to_thread(self.feedback_repository.count_feedback)
        pending = await asyncio.to_thread(
            self.suggestion_repository.list_pending, None, None
        )
        ranked = sorted(pending, key=lambda s: s.feedback_count, reverse=True)
        top_recipes = [s.recipe_name for s in ranked[:_TOP_RECIPES] if s.recipe_name]
        return LearningInsights(
            total_feedbacks=total,
            active_patterns=len(pending),
            top_recipes_needing_adjustment=top_recipes,
            overall_confidence=min(
                1.0, total / self.policy.insights_full_confidence_count
            ),
        )
