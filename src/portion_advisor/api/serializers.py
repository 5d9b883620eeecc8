"""JSON serialization of engine results."""

from portion_advisor.domain.patterns import PatternAnalysis
from portion_advisor.domain.suggestions import (
    AdjustmentSuggestion,
    ApplyResult,
    LearningInsights,
)


def serialize_suggestion(suggestion: AdjustmentSuggestion) -> dict[str, object]:
    return {
        "id": suggestion.id,
        "suggestion_type": suggestion.suggestion_type.value,
        "recipe_id": suggestion.recipe_id,
        "recipe_name": suggestion.recipe_name,
        "change_percent": suggestion.change_percent,
        "ingredient_name": suggestion.ingredient_name,
        "reason": suggestion.reason,
        "feedback_count": suggestion.feedback_count,
        "status": suggestion.status.value,
        "created_at": suggestion.created_at.isoformat()
        if suggestion.created_at
        else None,
        "applied_at": suggestion.applied_at.isoformat()
        if suggestion.applied_at
        else None,
    }


def serialize_apply_result(result: ApplyResult) -> dict[str, object]:
    return {
        "mutated_count": result.mutated_count,
        "errors": result.errors,
        "status": result.suggestion.status.value,
    }


def serialize_analysis(analysis: PatternAnalysis) -> dict[str, object]:
    portion = analysis.portion
    leftover = analysis.leftover
    return {
        "recipe_id": analysis.recipe_id,
        "recipe_name": analysis.recipe_name,
        "portion": {
            "too_much": portion.too_much,
            "good": portion.good,
            "too_little": portion.too_little,
            "confidence": portion.confidence,
            "recommendation": portion.recommendation.value,
            "suggested_change": portion.suggested_change,
        },
        "leftover": {
            "none": leftover.none,
            "some": leftover.some,
            "lots": leftover.lots,
            "confidence": leftover.confidence,
            "recommendation": leftover.recommendation.value,
            "suggested_change": leftover.suggested_change,
        },
        "missing_ingredients": {
            "ingredients": analysis.missing_ingredients.ingredients,
            "top_missing": analysis.missing_ingredients.top_missing,
        },
        "weekdays": [
            {"day_of_week": day.day_of_week, "average_rating": day.average_rating}
            for day in analysis.weekdays
        ],
        "meal_type_success": {
            meal_type.value: rate
            for meal_type, rate in analysis.meal_type_success.items()
        },
        "best_meal_type": {
            "meal_type": analysis.best_meal_type.meal_type.value,
            "success_rate": analysis.best_meal_type.success_rate,
        },
        "total_weighted_feedbacks": analysis.total_weighted_feedbacks,
    }


def serialize_insights(insights: LearningInsights) -> dict[str, object]:
    return {
        "total_feedbacks": insights.total_feedbacks,
        "active_patterns": insights.active_patterns,
        "top_recipes_needing_adjustment": insights.top_recipes_needing_adjustment,
        "overall_confidence": insights.overall_confidence,
    }
