"""Tests for container wiring."""

from portion_advisor.adapters.supabase_suggestion_repository import (
    SupabaseSuggestionRepository,
)
from portion_advisor.containers import build_container


def test_build_container_creates_engine(settings) -> None:
    container = build_container(settings)

    engine = container.engine
    assert isinstance(
        engine.suggestion_service.repository, SupabaseSuggestionRepository
    )
    assert engine.suggestion_service.locks is engine.adjustment_service.locks


def test_settings_override_policy(settings) -> None:
    container = build_container(settings.model_copy(update={"half_life_days": 7.0}))

    policy = container.engine.analyzer.policy
    assert policy.half_life_days == 7.0
    assert container.engine.analyzer.aggregator.policy is policy
