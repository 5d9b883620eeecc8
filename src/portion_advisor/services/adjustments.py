"""Applying approved suggestions to recipe and shopping-list quantities."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol

from portion_advisor.domain.errors import (
    InvalidSuggestionState,
    ItemNotFound,
    StoreUnavailable,
    SuggestionNotFound,
)
from portion_advisor.domain.policy import LearningPolicy
from portion_advisor.domain.recipes import Ingredient, MarketItem, Recipe
from portion_advisor.domain.suggestions import (
    AdjustmentSuggestion,
    ApplyResult,
    SuggestionStatus,
    SuggestionType,
)
from portion_advisor.services.locks import KeyedLocks
from portion_advisor.services.matching import find_matching_items
from portion_advisor.services.quantities import scale_quantity
from portion_advisor.services.suggestions import SuggestionRepository

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id."""

    def update_ingredients(self, recipe_id: str, ingredients: list[Ingredient]) -> None:
        """Replace the ingredient list of a recipe."""


class MarketRepository(Protocol):
    """Persistence interface for shopping-list items."""

    def list_items(self) -> list[MarketItem]:
        """Return all shopping-list items."""

    def update_item_quantity(self, item_id: str, quantity: str) -> None:
        """Update an item's quantity. Raises ItemNotFound for unknown ids."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AdjustmentService:
    """Rescales quantities for an approved suggestion and marks it applied."""

    suggestion_repository: SuggestionRepository
    recipe_repository: RecipeRepository
    market_repository: MarketRepository
    policy: LearningPolicy = field(default_factory=LearningPolicy)
    locks: KeyedLocks = field(default_factory=KeyedLocks)
    clock: Callable[[], datetime] = _utc_now

    async def apply(self, suggestion_id: str) -> ApplyResult:
        """Apply a pending suggestion.

        Missing records and failed per-item writes are reported in the result
        instead of aborting. The suggestion stays pending when nothing could be
        changed.
        """
        suggestion = await self._get(suggestion_id)
        async with self.locks.lock_for(suggestion.recipe_id or suggestion.id):
            suggestion = await self._get(suggestion_id)
            if suggestion.status != SuggestionStatus.PENDING:
                raise InvalidSuggestionState(
                    f"Suggestion {suggestion_id} is already {suggestion.status}"
                )
            result = ApplyResult(suggestion=suggestion)
            if suggestion.suggestion_type == SuggestionType.PORTION:
                await self._apply_portion(suggestion, result)
            elif suggestion.suggestion_type == SuggestionType.MARKET:
                await self._apply_market(suggestion, result)

            acknowledged = suggestion.suggestion_type == SuggestionType.INGREDIENT
            if result.mutated_count == 0 and not acknowledged:
                _logger.warning(
                    "Suggestion left pending: id=%s errors=%s",
                    suggestion_id,
                    result.errors,
                )
                return result

            applied_at = self.clock()
            await asyncio.to_thread(
                self.suggestion_repository.update_suggestion,
                suggestion_id,
                {
                    "status": SuggestionStatus.APPLIED.value,
                    "applied_at": applied_at.isoformat(),
                },
            )
            result.suggestion = replace(
                suggestion, status=SuggestionStatus.APPLIED, applied_at=applied_at
            )
            _logger.info(
                "Suggestion applied: id=%s type=%s mutated=%s errors=%s",
                suggestion_id,
                suggestion.suggestion_type,
                result.mutated_count,
                len(result.errors),
            )
            return result

    async def _get(self, suggestion_id: str) -> AdjustmentSuggestion:
        suggestion = await asyncio.to_thread(
            self.suggestion_repository.get_suggestion, suggestion_id
        )
        if suggestion is None:
            raise SuggestionNotFound(f"Suggestion {suggestion_id} not found")
        return suggestion

    async def _load_recipe(
        self, suggestion: AdjustmentSuggestion, result: ApplyResult
    ) -> Recipe | None:
        if not suggestion.recipe_id:
            result.errors.append(f"Suggestion {suggestion.id} has no recipe")
            return None
        recipe = await asyncio.to_thread(
            self.recipe_repository.get_recipe, suggestion.recipe_id
        )
        if recipe is None:
            result.errors.append(f"Recipe {suggestion.recipe_id} not found")
        return recipe

    async def _apply_portion(
        self, suggestion: AdjustmentSuggestion, result: ApplyResult
    ) -> None:
        recipe = await self._load_recipe(suggestion, result)
        if recipe is None:
            return
        multiplier = 1 + (suggestion.change_percent or 0) / 100
        scaled, changed = scale_ingredients(recipe.ingredients, multiplier)
        if changed == 0:
            result.errors.append(f"Recipe {recipe.id} has no quantities to adjust")
            return
        await asyncio.to_thread(
            self.recipe_repository.update_ingredients, recipe.id, scaled
        )
        result.mutated_count += changed

    async def _apply_market(
        self, suggestion: AdjustmentSuggestion, result: ApplyResult
    ) -> None:
        recipe = await self._load_recipe(suggestion, result)
        if recipe is None:
            return
        change = suggestion.change_percent or self.policy.default_market_change
        multiplier = 1 + change / 100
        names = [ingredient.name.lower() for ingredient in recipe.ingredients]
        items = await asyncio.to_thread(self.market_repository.list_items)
        matched = find_matching_items(names, items)
        if not matched:
            result.errors.append(f"No shopping-list items match recipe {recipe.id}")
            return
        for item in matched:
            quantity = scale_quantity(item.quantity, multiplier)
            try:
                await asyncio.to_thread(
                    self.market_repository.update_item_quantity, item.id, quantity
                )
            except ItemNotFound:
                _logger.warning("Shopping item vanished: id=%s", item.id)
                result.errors.append(f"Item {item.id} not found")
                continue
            except StoreUnavailable as exc:
                _logger.warning(
                    "Shopping item update failed: id=%s error=%s", item.id, exc
                )
                result.errors.append(f"Item {item.id} update failed: {exc}")
                continue
            result.mutated_count += 1


def scale_ingredients(
    ingredients: list[Ingredient], multiplier: float
) -> tuple[list[Ingredient], int]:
    """Scale every present quantity field; return the new list and rows changed."""
    scaled: list[Ingredient] = []
    changed = 0
    for ingredient in ingredients:
        updated = replace(
            ingredient,
            luis=_scale_optional(ingredient.luis, multiplier),
            mariana=_scale_optional(ingredient.mariana, multiplier),
            total=_scale_optional(ingredient.total, multiplier),
        )
        if any((ingredient.luis, ingredient.mariana, ingredient.total)):
            changed += 1
        scaled.append(updated)
    return scaled, changed


def _scale_optional(raw: str | None, multiplier: float) -> str | None:
    if not raw:
        return raw
    return scale_quantity(raw, multiplier)
