"""Tests for the engine facade."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from portion_advisor.containers import build_engine
from portion_advisor.domain.errors import StoreUnavailable
from portion_advisor.domain.feedback import PortionRating
from portion_advisor.domain.recipes import MarketItem
from portion_advisor.domain.suggestions import SuggestionStatus
from tests.conftest import InMemoryFeedbackRepository, make_event


@dataclass
class FailingInventoryRepository:
    def mark_depleted(self, item_id: str) -> None:
        raise StoreUnavailable(f"inventory unavailable for {item_id}")


def _seed(
    feedback_repository: InMemoryFeedbackRepository, too_much: int, good: int = 0
) -> None:
    now = datetime.now(tz=UTC)
    feedback_repository.add(
        *[
            make_event(portion=PortionRating.TOO_MUCH, created_at=now)
            for _ in range(too_much)
        ],
        *[make_event(portion=PortionRating.GOOD, created_at=now) for _ in range(good)],
    )


def test_feedback_then_apply(engine, feedback_repository, recipe_repository) -> None:
    _seed(feedback_repository, too_much=4, good=1)

    touched = asyncio.run(engine.on_feedback_saved(make_event()))
    result = asyncio.run(engine.apply_suggestion(touched[0].id))

    assert result.suggestion.status == SuggestionStatus.APPLIED
    assert recipe_repository.recipes["recipe-1"].ingredients[0].mariana == "136.8 g"
    assert asyncio.run(engine.list_pending()) == []


def test_concurrent_feedback_through_engine(
    engine, feedback_repository, suggestion_repository
) -> None:
    _seed(feedback_repository, too_much=2)

    async def run() -> None:
        await asyncio.gather(
            engine.on_feedback_saved(make_event()),
            engine.on_feedback_saved(make_event()),
        )

    asyncio.run(run())

    pending = asyncio.run(engine.list_pending())
    assert len(pending) == 1
    assert pending[0].feedback_count == 2


def test_inventory_failure_does_not_block_analysis(  # noqa: PLR0913
    settings,
    feedback_repository,
    suggestion_repository,
    recipe_repository,
    market_repository,
    caplog,
    monkeypatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("portion_advisor"), "propagate", True)
    market_repository.add(MarketItem(id="m1", name="Sal", quantity="1 kg"))
    engine = build_engine(
        settings,
        feedback_repository=feedback_repository,
        suggestion_repository=suggestion_repository,
        recipe_repository=recipe_repository,
        market_repository=market_repository,
        inventory_repository=FailingInventoryRepository(),
    )
    _seed(feedback_repository, too_much=4, good=1)

    with caplog.at_level(logging.ERROR):
        touched = asyncio.run(engine.on_feedback_saved(make_event(used_up=("sal",))))

    assert len(touched) == 1
    assert "Failed to update inventory" in caplog.text


def test_analyze_and_dismiss(engine, feedback_repository) -> None:
    _seed(feedback_repository, too_much=4, good=1)

    analysis = asyncio.run(engine.analyze_recipe("recipe-1"))
    touched = asyncio.run(engine.rescan_all())
    asyncio.run(engine.dismiss_suggestion(touched[0].id))

    assert analysis is not None
    assert analysis.portion.suggested_change == -24
    assert asyncio.run(engine.list_pending()) == []
    assert asyncio.run(engine.learning_insights()).total_feedbacks == 5
