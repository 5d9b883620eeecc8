"""Supabase repository for meal feedback."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum

from supabase import Client

from portion_advisor.adapters.supabase_errors import store_errors
from portion_advisor.domain.feedback import (
    FeedbackEvent,
    LeftoverRating,
    MealType,
    PortionRating,
)
from portion_advisor.services.aggregation import FeedbackRepository

_COLUMNS = (
    "id, date, meal_type, recipe_id, recipe_name, portion_rating, "
    "leftover_rating, missing_ingredients, used_up_ingredients, notes, created_at"
)


@dataclass
class SupabaseFeedbackRepository(FeedbackRepository):
    """Supabase implementation for the meal_feedback table."""

    client: Client
    page_size: int = 1000

    def list_feedback(self, recipe_id: str | None, limit: int) -> list[FeedbackEvent]:
        """Return the newest feedback rows, optionally for one recipe."""
        with store_errors("list feedback"):
            query = (
                self.client.table("meal_feedback")
                .select(_COLUMNS)
                .order("created_at", desc=True)
                .limit(limit)
            )
            if recipe_id:
                query = query.eq("recipe_id", recipe_id)
            response = query.execute()
        return [_parse_event(row) for row in response.data or []]

    def list_recipe_ids(self) -> list[str]:
        """Return distinct recipe ids that have feedback.

        Rows are read in pages of ``page_size``, which must not exceed the
        server-side row cap (PostgREST max-rows, 1000 on Supabase).
        """
        recipe_ids: list[str] = []
        start = 0
        while True:
            with store_errors("list feedback recipes"):
                response = (
                    self.client.table("meal_feedback")
                    .select("recipe_id")
                    .not_.is_("recipe_id", "null")
                    .order("recipe_id", desc=False)
                    .range(start, start + self.page_size - 1)
                    .execute()
                )
            rows = response.data or []
            for row in rows:
                recipe_id = row.get("recipe_id")
                if recipe_id and str(recipe_id) not in recipe_ids:
                    recipe_ids.append(str(recipe_id))
            if len(rows) < self.page_size:
                return recipe_ids
            start += self.page_size

    def count_feedback(self) -> int:
        """Return the number of feedback rows."""
        with store_errors("count feedback"):
            response = (
                self.client.table("meal_feedback")
                .select("id", count="exact", head=True)
                .execute()
            )
        return response.count or 0


def _parse_event(row: dict[str, object]) -> FeedbackEvent:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    date_raw = row.get("date")
    meal_date = (
        date.fromisoformat(date_raw[:10])
        if isinstance(date_raw, str) and date_raw
        else created_at.date()
    )
    return FeedbackEvent(
        id=str(row["id"]),
        date=meal_date,
        meal_type=_parse_enum(MealType, row.get("meal_type")) or MealType.LUNCH,
        recipe_id=str(row["recipe_id"]) if row.get("recipe_id") else None,
        recipe_name=row.get("recipe_name"),
        portion_rating=_parse_enum(PortionRating, row.get("portion_rating")),
        leftover_rating=_parse_enum(LeftoverRating, row.get("leftover_rating")),
        missing_ingredients=frozenset(row.get("missing_ingredients") or []),
        used_up_ingredients=frozenset(row.get("used_up_ingredients") or []),
        notes=str(row.get("notes") or ""),
        created_at=created_at,
    )


def _parse_enum(enum_type: type[StrEnum], value: object) -> StrEnum | None:
    try:
        return enum_type(value)
    except ValueError:
        return None
