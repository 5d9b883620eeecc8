"""Suggestion lifecycle: create, refresh and dismiss pending suggestions."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol

from portion_advisor.domain.errors import (
    ConcurrencyConflict,
    InvalidSuggestionState,
    SuggestionNotFound,
)
from portion_advisor.domain.feedback import FeedbackEvent
from portion_advisor.domain.patterns import (
    LeftoverRecommendation,
    PatternAnalysis,
    PortionRecommendation,
)
from portion_advisor.domain.policy import LearningPolicy
from portion_advisor.domain.suggestions import (
    AdjustmentSuggestion,
    SuggestionDraft,
    SuggestionStatus,
    SuggestionType,
)
from portion_advisor.services.locks import KeyedLocks
from portion_advisor.services.patterns import PatternAnalyzer
from portion_advisor.services.quantities import round_half_up

_logger = logging.getLogger(__name__)


class SuggestionRepository(Protocol):
    """Persistence interface for adjustment suggestions."""

    def get_suggestion(self, suggestion_id: str) -> AdjustmentSuggestion | None:
        """Return a suggestion by id."""

    def list_pending(
        self,
        recipe_id: str | None = None,
        suggestion_type: SuggestionType | None = None,
    ) -> list[AdjustmentSuggestion]:
        """Return pending suggestions, highest feedback count first."""

    def insert_suggestion(self, draft: SuggestionDraft) -> AdjustmentSuggestion:
        """Insert a pending suggestion.

        Raises ConcurrencyConflict when a pending suggestion already exists for
        the same recipe and type.
        """

    def update_suggestion(self, suggestion_id: str, fields: dict[str, object]) -> None:
        """Update columns of a suggestion."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SuggestionService:
    """Keeps at most one pending suggestion per recipe and type."""

    analyzer: PatternAnalyzer
    repository: SuggestionRepository
    policy: LearningPolicy = field(default_factory=LearningPolicy)
    locks: KeyedLocks = field(default_factory=KeyedLocks)
    clock: Callable[[], datetime] = _utc_now

    async def on_feedback_saved(
        self, event: FeedbackEvent
    ) -> list[AdjustmentSuggestion]:
        """Re-analyze the event's recipe and create or refresh suggestions."""
        if not event.recipe_id:
            return []
        async with self.locks.lock_for(event.recipe_id):
            analysis = await self.analyzer.analyze_recipe(event.recipe_id)
            if analysis is None:
                return []
            drafts = build_drafts(analysis, self.policy)
            if not drafts:
                return []
            pending = await asyncio.to_thread(
                self.repository.list_pending, event.recipe_id, None
            )
            existing = {item.suggestion_type: item for item in pending}
            touched: list[AdjustmentSuggestion] = []
            for draft in drafts:
                current = existing.get(draft.suggestion_type)
                if current is not None:
                    touched.append(await self._refresh(current, draft))
                else:
                    suggestion, _ = await self._insert_or_refresh(draft)
                    touched.append(suggestion)
            return touched

    async def rescan_all(
        self, cancel_event: asyncio.Event | None = None
    ) -> list[AdjustmentSuggestion]:
        """Analyze every recipe with feedback and create missing suggestions.

        Types that already have a pending suggestion are skipped, so repeated
        runs never duplicate work. Setting ``cancel_event`` stops the scan
        before the next recipe.
        """
        created: list[AdjustmentSuggestion] = []
        recipe_ids = await self.analyzer.aggregator.list_recipe_ids()
        for index, recipe_id in enumerate(recipe_ids):
            if cancel_event is not None and cancel_event.is_set():
                _logger.info(
                    "Rescan cancelled: processed=%s remaining=%s",
                    index,
                    len(recipe_ids) - index,
                )
                break
            async with self.locks.lock_for(recipe_id):
                created.extend(await self._create_missing(recipe_id))
        _logger.info(
            "Rescan finished: recipes=%s created=%s", len(recipe_ids), len(created)
        )
        return created

    async def dismiss(self, suggestion_id: str) -> AdjustmentSuggestion:
        """Move a pending suggestion to dismissed."""
        suggestion = await self._get(suggestion_id)
        async with self.locks.lock_for(suggestion.recipe_id or suggestion.id):
            suggestion = await self._get(suggestion_id)
            if suggestion.status != SuggestionStatus.PENDING:
                raise InvalidSuggestionState(
                    f"Suggestion {suggestion_id} is already {suggestion.status}"
                )
            await asyncio.to_thread(
                self.repository.update_suggestion,
                suggestion_id,
                {"status": SuggestionStatus.DISMISSED.value},
            )
        _logger.info("Suggestion dismissed: id=%s", suggestion_id)
        return replace(suggestion, status=SuggestionStatus.DISMISSED)

    async def list_pending(self) -> list[AdjustmentSuggestion]:
        """Return every pending suggestion."""
        return await asyncio.to_thread(self.repository.list_pending, None, None)

    async def _get(self, suggestion_id: str) -> AdjustmentSuggestion:
        suggestion = await asyncio.to_thread(
            self.repository.get_suggestion, suggestion_id
        )
        if suggestion is None:
            raise SuggestionNotFound(f"Suggestion {suggestion_id} not found")
        return suggestion

    async def _create_missing(self, recipe_id: str) -> list[AdjustmentSuggestion]:
        analysis = await self.analyzer.analyze_recipe(recipe_id)
        if analysis is None:
            return []
        drafts = build_drafts(analysis, self.policy)
        if not drafts:
            return []
        pending = await asyncio.to_thread(self.repository.list_pending, recipe_id, None)
        pending_types = {suggestion.suggestion_type for suggestion in pending}
        created: list[AdjustmentSuggestion] = []
        for draft in drafts:
            if draft.suggestion_type in pending_types:
                continue
            suggestion, inserted = await self._insert_or_refresh(draft)
            if inserted:
                created.append(suggestion)
        return created

    async def _insert_or_refresh(
        self, draft: SuggestionDraft
    ) -> tuple[AdjustmentSuggestion, bool]:
        try:
            suggestion = await asyncio.to_thread(
                self.repository.insert_suggestion, draft
            )
        except ConcurrencyConflict:
            _logger.warning(
                "Pending suggestion already exists: recipe_id=%s type=%s",
                draft.recipe_id,
                draft.suggestion_type,
            )
            pending = await asyncio.to_thread(
                self.repository.list_pending, draft.recipe_id, draft.suggestion_type
            )
            if not pending:
                raise
            return await self._refresh(pending[0], draft), False
        _logger.info(
            "Suggestion created: id=%s recipe_id=%s type=%s change=%s",
            suggestion.id,
            suggestion.recipe_id,
            suggestion.suggestion_type,
            suggestion.change_percent,
        )
        return suggestion, True

    async def _refresh(
        self, suggestion: AdjustmentSuggestion, draft: SuggestionDraft
    ) -> AdjustmentSuggestion:
        fields: dict[str, object] = {
            "feedback_count": draft.feedback_count,
            "reason": draft.reason,
            "change_percent": draft.change_percent,
            "ingredient_name": draft.ingredient_name,
        }
        await asyncio.to_thread(
            self.repository.update_suggestion, suggestion.id, fields
        )
        _logger.info(
            "Suggestion refreshed: id=%s feedback_count=%s",
            suggestion.id,
            draft.feedback_count,
        )
        return replace(
            suggestion,
            feedback_count=draft.feedback_count,
            reason=draft.reason,
            change_percent=draft.change_percent,
            ingredient_name=draft.ingredient_name,
        )


def build_drafts(
    analysis: PatternAnalysis, policy: LearningPolicy
) -> list[SuggestionDraft]:
    """Turn an analysis into suggestion drafts whose thresholds are met."""
    if analysis.total_weighted_feedbacks < policy.min_weighted_count:
        return []
    feedback_count = int(round_half_up(analysis.total_weighted_feedbacks))
    drafts: list[SuggestionDraft] = []

    portion = analysis.portion
    if portion.recommendation != PortionRecommendation.NONE:
        percent = int(round_half_up(portion.confidence * 100))
        direction = (
            "too large"
            if portion.recommendation == PortionRecommendation.DECREASE
            else "too small"
        )
        drafts.append(
            SuggestionDraft(
                suggestion_type=SuggestionType.PORTION,
                recipe_id=analysis.recipe_id,
                recipe_name=analysis.recipe_name,
                change_percent=portion.suggested_change,
                ingredient_name=None,
                reason=(
                    f"{percent}% of weighted feedback indicates portions {direction}"
                ),
                feedback_count=feedback_count,
            )
        )

    leftover = analysis.leftover
    if leftover.recommendation == LeftoverRecommendation.REDUCE_PORTIONS:
        reports = int(round_half_up(leftover.lots))
        drafts.append(
            SuggestionDraft(
                suggestion_type=SuggestionType.MARKET,
                recipe_id=analysis.recipe_id,
                recipe_name=analysis.recipe_name,
                change_percent=leftover.suggested_change,
                ingredient_name=None,
                reason=(
                    f"Leftover pattern detected: {reports} weighted reports "
                    "of lots of leftovers"
                ),
                feedback_count=feedback_count,
            )
        )

    top_missing = analysis.missing_ingredients.top_missing
    if top_missing:
        names = ", ".join(top_missing)
        drafts.append(
            SuggestionDraft(
                suggestion_type=SuggestionType.INGREDIENT,
                recipe_id=analysis.recipe_id,
                recipe_name=analysis.recipe_name,
                change_percent=None,
                ingredient_name=names,
                reason=(
                    f"Frequently missing ingredients: {names}. "
                    "Consider adding them to the shopping list."
                ),
                feedback_count=feedback_count,
            )
        )
    return drafts
