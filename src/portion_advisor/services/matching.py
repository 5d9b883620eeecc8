"""Loose ingredient-to-shopping-item name matching."""

from collections.abc import Iterable

from portion_advisor.domain.recipes import MarketItem


def ingredient_matches(item_name: str, ingredient_name: str) -> bool:
    """Return True when either name contains the other, ignoring case."""
    item = item_name.strip().lower()
    ingredient = ingredient_name.strip().lower()
    if not item or not ingredient:
        return False
    return item in ingredient or ingredient in item


def find_matching_items(
    ingredient_names: Iterable[str], items: Iterable[MarketItem]
) -> list[MarketItem]:
    """Return items whose name matches any of the ingredient names."""
    names = [name for name in ingredient_names if name.strip()]
    return [
        item
        for item in items
        if any(ingredient_matches(item.name, name) for name in names)
    ]


def first_matching_item(
    ingredient_name: str, items: Iterable[MarketItem]
) -> MarketItem | None:
    """Return the first item matching a single ingredient name."""
    for item in items:
        if ingredient_matches(item.name, ingredient_name):
            return item
    return None
