"""Parsing, formatting and scaling of free-form quantity strings."""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal

from portion_advisor.domain.quantities import Quantity

_NUMBER_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")

_logger = logging.getLogger(__name__)


def parse_quantity(raw: str | None) -> Quantity:
    """Parse a string like ``"280g"`` or ``"2,5 kg"`` into a quantity.

    Never raises. Strings without a numeric token are treated as one unit of
    whatever they describe.
    """
    text = (raw or "").strip()
    match = _NUMBER_PATTERN.search(text)
    if match is None:
        if text:
            _logger.warning("Unparsable quantity %r, assuming 1", text)
        return Quantity(value=1.0, unit=text)
    value = float(match.group(0).replace(",", "."))
    unit = text[match.end() :].strip()
    return Quantity(value=value, unit=unit)


def format_quantity(quantity: Quantity) -> str:
    """Render a quantity rounded to one decimal place."""
    rounded = round_half_up(quantity.value, places=1)
    numeral = f"{rounded:.1f}"
    if numeral.endswith(".0"):
        numeral = numeral[:-2]
    if numeral == "-0":
        numeral = "0"
    if quantity.unit:
        return f"{numeral} {quantity.unit}"
    return numeral


def scale_quantity(raw: str | None, multiplier: float) -> str:
    """Multiply the numeric part of a quantity string, keeping its unit."""
    return format_quantity(parse_quantity(raw).scaled(multiplier))


def round_half_up(value: float, places: int = 0) -> float:
    """Round halves away from zero instead of to even."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))
