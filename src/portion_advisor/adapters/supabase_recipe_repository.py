"""Supabase repository for recipe ingredients."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from portion_advisor.adapters.supabase_errors import store_errors
from portion_advisor.domain.recipes import Ingredient, Recipe
from portion_advisor.services.adjustments import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for the recipes table."""

    client: Client

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe with its ingredient lines."""
        with store_errors("get recipe"):
            response = (
                self.client.table("recipes")
                .select("id, name, ingredients")
                .eq("id", recipe_id)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        return Recipe(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            ingredients=[
                _parse_ingredient(entry)
                for entry in row.get("ingredients") or []
                if isinstance(entry, dict)
            ],
        )

    def update_ingredients(self, recipe_id: str, ingredients: list[Ingredient]) -> None:
        """Replace a recipe's ingredient list."""
        with store_errors("update recipe ingredients"):
            self.client.table("recipes").update(
                {
                    "ingredients": [_dump_ingredient(entry) for entry in ingredients],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).eq("id", recipe_id).execute()


def _parse_ingredient(entry: dict[str, object]) -> Ingredient:
    return Ingredient(
        name=str(entry.get("name") or ""),
        luis=entry.get("luis"),
        mariana=entry.get("mariana"),
        total=entry.get("total"),
    )


def _dump_ingredient(ingredient: Ingredient) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": ingredient.name,
        "luis": ingredient.luis or "",
        "mariana": ingredient.mariana or "",
    }
    if ingredient.total:
        payload["total"] = ingredient.total
    return payload
