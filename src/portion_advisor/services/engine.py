"""Host-facing entry points of the adjustment engine."""

import asyncio
import logging
from dataclasses import dataclass

from portion_advisor.domain.errors import StoreUnavailable
from portion_advisor.domain.feedback import FeedbackEvent
from portion_advisor.domain.patterns import PatternAnalysis
from portion_advisor.domain.suggestions import (
    AdjustmentSuggestion,
    ApplyResult,
    LearningInsights,
)
from portion_advisor.services.adjustments import AdjustmentService
from portion_advisor.services.insights import InsightsService
from portion_advisor.services.inventory import InventoryService
from portion_advisor.services.patterns import PatternAnalyzer
from portion_advisor.services.suggestions import SuggestionService

_logger = logging.getLogger(__name__)


@dataclass
class FeedbackEngine:
    """Facade over analysis, suggestion lifecycle and adjustments."""

    analyzer: PatternAnalyzer
    suggestion_service: SuggestionService
    adjustment_service: AdjustmentService
    inventory_service: InventoryService
    insights_service: InsightsService

    async def analyze_recipe(self, recipe_id: str) -> PatternAnalysis | None:
        """Return the current pattern analysis for a recipe."""
        return await self.analyzer.analyze_recipe(recipe_id)

    async def on_feedback_saved(
        self, event: FeedbackEvent
    ) -> list[AdjustmentSuggestion]:
        """Handle a newly stored feedback event."""
        try:
            await self.inventory_service.deplete_used_up(event)
        except StoreUnavailable:
            _logger.exception(
                "Failed to update inventory", extra={"feedback_id": event.id}
            )
        return await self.suggestion_service.on_feedback_saved(event)

    async def rescan_all(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[AdjustmentSuggestion]:
        """Run the idempotent batch analysis."""
        return await self.suggestion_service.rescan_all(cancel_event)

    async def list_pending(self) -> list[AdjustmentSuggestion]:
        """Return suggestions awaiting review."""
        return await self.suggestion_service.list_pending()

    async def apply_suggestion(self, suggestion_id: str) -> ApplyResult:
        """Apply an approved suggestion."""
        return await self.adjustment_service.apply(suggestion_id)

    async def dismiss_suggestion(self, suggestion_id: str) -> None:
        """Dismiss a pending suggestion."""
        await self.suggestion_service.dismiss(suggestion_id)

    async def learning_insights(self) -> LearningInsights:
        """Return a summary of what has been learned."""
        return await self.insights_service.summary()
