"""Supabase repository for shopping-list items."""

from dataclasses import dataclass

from supabase import Client

from portion_advisor.adapters.supabase_errors import store_errors
from portion_advisor.domain.errors import ItemNotFound
from portion_advisor.domain.recipes import MarketItem
from portion_advisor.services.adjustments import MarketRepository


@dataclass
class SupabaseMarketRepository(MarketRepository):
    """Supabase implementation for the market_items table."""

    client: Client

    def list_items(self) -> list[MarketItem]:
        """Return every shopping-list item."""
        with store_errors("list market items"):
            response = (
                self.client.table("market_items")
                .select("id, name, quantity")
                .order("order_index", desc=False)
                .execute()
            )
        return [
            MarketItem(
                id=str(row["id"]),
                name=str(row.get("name") or ""),
                quantity=str(row.get("quantity") or ""),
            )
            for row in response.data or []
        ]

    def update_item_quantity(self, item_id: str, quantity: str) -> None:
        """Update an item's quantity string."""
        with store_errors("update market item"):
            response = (
                self.client.table("market_items")
                .update({"quantity": quantity})
                .eq("id", item_id)
                .execute()
            )
        if not response.data:
            raise ItemNotFound(f"Item {item_id} not found")
