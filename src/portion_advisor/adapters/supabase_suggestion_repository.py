"""Supabase repository for adjustment suggestions."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from portion_advisor.adapters.supabase_errors import store_errors
from portion_advisor.domain.suggestions import (
    AdjustmentSuggestion,
    SuggestionDraft,
    SuggestionStatus,
    SuggestionType,
)
from portion_advisor.services.suggestions import SuggestionRepository

_COLUMNS = (
    "id, suggestion_type, recipe_id, recipe_name, change_percent, "
    "ingredient_name, reason, feedback_count, status, created_at, applied_at"
)


@dataclass
class SupabaseSuggestionRepository(SuggestionRepository):
    """Supabase implementation for the adjustment_suggestions table.

    The table carries a partial unique index on (recipe_id, suggestion_type)
    where status = 'pending'; violations surface as ConcurrencyConflict.
    """

    client: Client

    def get_suggestion(self, suggestion_id: str) -> AdjustmentSuggestion | None:
        """Return a suggestion by id."""
        with store_errors("get suggestion"):
            response = (
                self.client.table("adjustment_suggestions")
                .select(_COLUMNS)
                .eq("id", suggestion_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_suggestion(response.data[0])

    def list_pending(
        self,
        recipe_id: str | None = None,
        suggestion_type: SuggestionType | None = None,
    ) -> list[AdjustmentSuggestion]:
        """Return pending suggestions, highest feedback count first."""
        with store_errors("list pending suggestions"):
            query = (
                self.client.table("adjustment_suggestions")
                .select(_COLUMNS)
                .eq("status", SuggestionStatus.PENDING.value)
            )
            if recipe_id:
                query = query.eq("recipe_id", recipe_id)
            if suggestion_type:
                query = query.eq("suggestion_type", suggestion_type.value)
            response = query.order("feedback_count", desc=True).execute()
        return [_parse_suggestion(row) for row in response.data or []]

    def insert_suggestion(self, draft: SuggestionDraft) -> AdjustmentSuggestion:
        """Insert a pending suggestion and return the stored row."""
        with store_errors("insert suggestion"):
            response = (
                self.client.table("adjustment_suggestions")
                .insert(
                    {
                        "suggestion_type": draft.suggestion_type.value,
                        "recipe_id": draft.recipe_id,
                        "recipe_name": draft.recipe_name,
                        "change_percent": draft.change_percent,
                        "ingredient_name": draft.ingredient_name,
                        "reason": draft.reason,
                        "feedback_count": draft.feedback_count,
                        "status": SuggestionStatus.PENDING.value,
                    }
                )
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to create suggestion")
        return _parse_suggestion(response.data[0])

    def update_suggestion(self, suggestion_id: str, fields: dict[str, object]) -> None:
        """Update suggestion columns."""
        with store_errors("update suggestion"):
            self.client.table("adjustment_suggestions").update(fields).eq(
                "id", suggestion_id
            ).execute()


def _parse_suggestion(row: dict[str, object]) -> AdjustmentSuggestion:
    change_percent = row.get("change_percent")
    return AdjustmentSuggestion(
        id=str(row["id"]),
        suggestion_type=SuggestionType(row["suggestion_type"]),
        recipe_id=str(row["recipe_id"]) if row.get("recipe_id") else None,
        recipe_name=row.get("recipe_name"),
        change_percent=int(change_percent) if change_percent is not None else None,
        ingredient_name=row.get("ingredient_name"),
        reason=str(row.get("reason") or ""),
        feedback_count=int(row.get("feedback_count") or 0),
        status=SuggestionStatus(row.get("status") or SuggestionStatus.PENDING),
        created_at=_parse_timestamp(row.get("created_at")),
        applied_at=_parse_timestamp(row.get("applied_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
