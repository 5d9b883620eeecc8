"""Marks pantry inventory as depleted for used-up ingredients."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from portion_advisor.domain.feedback import FeedbackEvent
from portion_advisor.services.adjustments import MarketRepository
from portion_advisor.services.matching import first_matching_item

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for pantry inventory."""

    def mark_depleted(self, item_id: str) -> None:
        """Set the stored inventory of an item to zero."""


@dataclass
class InventoryService:
    """Updates inventory from the used-up ingredients of a feedback event."""

    market_repository: MarketRepository
    inventory_repository: InventoryRepository

    async def deplete_used_up(self, event: FeedbackEvent) -> list[str]:
        """Zero the inventory of items matching used-up ingredients."""
        if not event.used_up_ingredients:
            return []
        items = await asyncio.to_thread(self.market_repository.list_items)
        depleted: list[str] = []
        for name in sorted(event.used_up_ingredients):
            item = first_matching_item(name, items)
            if item is None or item.id in depleted:
                continue
            await asyncio.to_thread(self.inventory_repository.mark_depleted, item.id)
            depleted.append(item.id)
        _logger.info(
            "Inventory depleted: feedback_id=%s items=%s", event.id, len(depleted)
        )
        return depleted
