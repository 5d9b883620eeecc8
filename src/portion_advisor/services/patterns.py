"""Pattern analysis over weighted feedback tallies."""

from dataclasses import dataclass, field

from portion_advisor.domain.feedback import MealType
from portion_advisor.domain.patterns import (
    FeedbackTallies,
    LeftoverPattern,
    LeftoverRecommendation,
    MealTypePattern,
    MissingIngredientsPattern,
    PatternAnalysis,
    PortionPattern,
    PortionRecommendation,
    WeekdayPattern,
)
from portion_advisor.domain.policy import LearningPolicy
from portion_advisor.services.aggregation import FeedbackAggregator, aggregate
from portion_advisor.services.quantities import round_half_up

_DEFAULT_RECIPE_NAME = "Recipe"


@dataclass
class PatternAnalyzer:
    """Runs aggregation and analysis for a recipe."""

    aggregator: FeedbackAggregator
    policy: LearningPolicy = field(default_factory=LearningPolicy)

    async def analyze_recipe(self, recipe_id: str) -> PatternAnalysis | None:
        """Return the current analysis, or None when no feedback counts."""
        weighted = await self.aggregator.load_weighted(recipe_id)
        if not weighted:
            return None
        recipe_name = weighted[0].event.recipe_name or _DEFAULT_RECIPE_NAME
        tallies = aggregate(weighted)
        return analyze_patterns(recipe_id, recipe_name, tallies, self.policy)


def analyze_patterns(
    recipe_id: str,
    recipe_name: str,
    tallies: FeedbackTallies,
    policy: LearningPolicy,
) -> PatternAnalysis:
    """Derive confidences and recommendations from tallies."""
    return PatternAnalysis(
        recipe_id=recipe_id,
        recipe_name=recipe_name,
        portion=analyze_portion(tallies, policy),
        leftover=analyze_leftover(tallies, policy),
        missing_ingredients=analyze_missing(tallies, policy),
        weekdays=[
            WeekdayPattern(day_of_week=day, average_rating=tally.rate)
            for day, tally in enumerate(tallies.weekdays)
        ],
        meal_type_success={
            meal_type: tally.rate
            for meal_type, tally in tallies.meal_types.items()
            if tally.total > 0
        },
        best_meal_type=_best_meal_type(tallies),
        total_weighted_feedbacks=tallies.total_weighted,
    )


def analyze_portion(tallies: FeedbackTallies, policy: LearningPolicy) -> PortionPattern:
    """Recommend a portion change when one rating clearly dominates."""
    too_much, good, too_little = tallies.too_much, tallies.good, tallies.too_little
    total = too_much + good + too_little
    confidence = max(too_much, good, too_little) / total if total > 0 else 0.0

    recommendation = PortionRecommendation.NONE
    change = 0
    gated = (
        confidence >= policy.portion_confidence_threshold
        and total >= policy.min_weighted_count
    )
    if gated and too_much > good and too_much > too_little:
        recommendation = PortionRecommendation.DECREASE
        change = -_capped_change(
            too_much / total, policy.portion_change_scale, policy.portion_change_cap
        )
    elif gated and too_little > good and too_little > too_much:
        recommendation = PortionRecommendation.INCREASE
        change = _capped_change(
            too_little / total, policy.portion_change_scale, policy.portion_change_cap
        )

    return PortionPattern(
        too_much=too_much,
        good=good,
        too_little=too_little,
        confidence=confidence,
        recommendation=recommendation,
        suggested_change=change,
    )


def analyze_leftover(
    tallies: FeedbackTallies, policy: LearningPolicy
) -> LeftoverPattern:
    """Recommend smaller purchases when lots of leftovers dominate."""
    none, some = tallies.leftover_none, tallies.leftover_some
    lots = tallies.leftover_lots
    total = none + some + lots
    confidence = lots / total if total > 0 else 0.0

    recommendation = LeftoverRecommendation.NONE
    change = 0
    if (
        confidence >= policy.leftover_confidence_threshold
        and total >= policy.min_weighted_count
        and lots > some + none
    ):
        recommendation = LeftoverRecommendation.REDUCE_PORTIONS
        change = -_capped_change(
            confidence, policy.leftover_change_scale, policy.leftover_change_cap
        )

    return LeftoverPattern(
        none=none,
        some=some,
        lots=lots,
        confidence=confidence,
        recommendation=recommendation,
        suggested_change=change,
    )


def analyze_missing(
    tallies: FeedbackTallies, policy: LearningPolicy
) -> MissingIngredientsPattern:
    """Rank missing ingredients by weighted count."""
    ranked = sorted(tallies.missing.items(), key=lambda entry: entry[1], reverse=True)
    top_missing = [
        name for name, weight in ranked if weight >= policy.missing_min_weight
    ][: policy.missing_top_n]
    return MissingIngredientsPattern(
        ingredients=dict(tallies.missing), top_missing=top_missing
    )


def _capped_change(share: float, scale: int, cap: int) -> int:
    return min(cap, int(round_half_up(share * scale)))


def _best_meal_type(tallies: FeedbackTallies) -> MealTypePattern:
    best: MealTypePattern | None = None
    for meal_type, tally in tallies.meal_types.items():
        if tally.total <= 0:
            continue
        if best is None or tally.rate > best.success_rate:
            best = MealTypePattern(meal_type=meal_type, success_rate=tally.rate)
    return best or MealTypePattern(meal_type=MealType.LUNCH, success_rate=0.0)
