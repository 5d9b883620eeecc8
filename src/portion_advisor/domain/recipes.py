"""Recipe and shopping-list models touched by adjustments."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line with per-person and total quantity strings."""

    name: str
    luis: str | None = None
    mariana: str | None = None
    total: str | None = None


@dataclass(frozen=True)
class Recipe:
    """Recipe with its ingredient lines."""

    id: str
    name: str
    ingredients: list[Ingredient]


@dataclass(frozen=True)
class MarketItem:
    """Shopping-list entry."""

    id: str
    name: str
    quantity: str
