"""Quantity value object for recipe and shopping-list amounts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quantity:
    """Numeric amount with a free-text unit suffix (may be empty)."""

    value: float
    unit: str

    def scaled(self, multiplier: float) -> "Quantity":
        """Return a copy with the value multiplied."""
        return Quantity(value=self.value * multiplier, unit=self.unit)
