"""Domain models for adjustment suggestions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class SuggestionType(StrEnum):
    """Kind of change a suggestion proposes."""

    PORTION = "portion"
    MARKET = "market"
    INGREDIENT = "ingredient"


class SuggestionStatus(StrEnum):
    """Lifecycle state. Applied and dismissed are terminal."""

    PENDING = "pending"
    APPLIED = "applied"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class SuggestionDraft:
    """Suggestion content computed from an analysis, not yet persisted."""

    suggestion_type: SuggestionType
    recipe_id: str
    recipe_name: str
    change_percent: int | None
    ingredient_name: str | None
    reason: str
    feedback_count: int


@dataclass(frozen=True)
class AdjustmentSuggestion:
    """Persisted adjustment suggestion."""

    id: str
    suggestion_type: SuggestionType
    recipe_id: str | None
    recipe_name: str | None
    change_percent: int | None
    ingredient_name: str | None
    reason: str
    feedback_count: int
    status: SuggestionStatus
    created_at: datetime | None = None
    applied_at: datetime | None = None


@dataclass
class ApplyResult:
    """Outcome of applying a suggestion."""

    suggestion: AdjustmentSuggestion
    mutated_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.suggestion.status == SuggestionStatus.APPLIED


@dataclass(frozen=True)
class LearningInsights:
    """Summary of what the engine has learned so far."""

    total_feedbacks: int
    active_patterns: int
    top_recipes_needing_adjustment: list[str]
    overall_confidence: float
