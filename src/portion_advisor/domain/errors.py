"""Errors raised by the adjustment engine.

Parsing problems never surface here: unparsable quantities degrade to a value
of one and are logged as warnings instead.
"""


class AdjustmentEngineError(Exception):
    """Base class for engine errors."""


class NotFoundError(AdjustmentEngineError):
    """Raised when a referenced record does not exist."""


class SuggestionNotFound(NotFoundError):
    """Raised when a suggestion id is unknown."""


class RecipeNotFound(NotFoundError):
    """Raised when a recipe cannot be loaded."""


class ItemNotFound(NotFoundError):
    """Raised when a shopping-list item cannot be loaded or updated."""


class InvalidSuggestionState(AdjustmentEngineError):
    """Raised when a suggestion is not in a state that allows the action."""


class ConcurrencyConflict(AdjustmentEngineError):
    """Raised when a pending suggestion already exists for the same key."""


class StoreUnavailable(AdjustmentEngineError):
    """Raised when the backing store cannot be reached or rejects a call."""
