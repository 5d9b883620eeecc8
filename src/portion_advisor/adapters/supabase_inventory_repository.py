"""Supabase repository for pantry inventory."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from portion_advisor.adapters.supabase_errors import store_errors
from portion_advisor.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase implementation for the inventory table."""

    client: Client

    def mark_depleted(self, item_id: str) -> None:
        """Upsert a zero inventory row for the item."""
        with store_errors("mark inventory depleted"):
            self.client.table("inventory").upsert(
                {
                    "item_id": item_id,
                    "current_quantity": "0",
                    "current_number": 0,
                    "last_updated": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="item_id",
            ).execute()
