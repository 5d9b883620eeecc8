"""Tests for ingredient name matching."""

from portion_advisor.domain.recipes import MarketItem
from portion_advisor.services.matching import (
    find_matching_items,
    first_matching_item,
    ingredient_matches,
)


def test_matches_in_both_directions() -> None:
    assert ingredient_matches("Tomate", "tomate cherry")
    assert ingredient_matches("Tomate cherry", "TOMATE")
    assert not ingredient_matches("Arroz", "Tomate")


def test_empty_names_never_match() -> None:
    assert not ingredient_matches("", "tomate")
    assert not ingredient_matches("tomate", "  ")


def test_find_matching_items() -> None:
    items = [
        MarketItem(id="1", name="Pechuga de pollo", quantity="1 kg"),
        MarketItem(id="2", name="Arroz", quantity="2 kg"),
        MarketItem(id="3", name="Leche", quantity="1 l"),
    ]

    matched = find_matching_items(["pollo", "arroz integral"], items)

    assert [item.id for item in matched] == ["1", "2"]
    assert first_matching_item("leche entera", items) == items[2]
    assert first_matching_item("queso", items) is None
