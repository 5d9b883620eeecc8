"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from portion_advisor.adapters.supabase_feedback_repository import (
    SupabaseFeedbackRepository,
)
from portion_advisor.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from portion_advisor.adapters.supabase_market_repository import (
    SupabaseMarketRepository,
)
from portion_advisor.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from portion_advisor.adapters.supabase_suggestion_repository import (
    SupabaseSuggestionRepository,
)
from portion_advisor.config import Settings
from portion_advisor.services.adjustments import (
    AdjustmentService,
    MarketRepository,
    RecipeRepository,
)
from portion_advisor.services.aggregation import FeedbackAggregator, FeedbackRepository
from portion_advisor.services.engine import FeedbackEngine
from portion_advisor.services.insights import InsightsService
from portion_advisor.services.inventory import InventoryRepository, InventoryService
from portion_advisor.services.locks import KeyedLocks
from portion_advisor.services.patterns import PatternAnalyzer
from portion_advisor.services.suggestions import SuggestionRepository, SuggestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    engine: FeedbackEngine


def build_engine(  # noqa: PLR0913
    settings: Settings,
    feedback_repository: FeedbackRepository,
    suggestion_repository: SuggestionRepository,
    recipe_repository: RecipeRepository,
    market_repository: MarketRepository,
    inventory_repository: InventoryRepository,
) -> FeedbackEngine:
    """Wire the engine services around the given repositories."""
    policy = settings.learning_policy()
    locks = KeyedLocks()
    analyzer = PatternAnalyzer(
        aggregator=FeedbackAggregator(feedback_repository, policy=policy),
        policy=policy,
    )
    return FeedbackEngine(
        analyzer=analyzer,
        suggestion_service=SuggestionService(
            analyzer=analyzer,
            repository=suggestion_repository,
            policy=policy,
            locks=locks,
        ),
        adjustment_service=AdjustmentService(
            suggestion_repository=suggestion_repository,
            recipe_repository=recipe_repository,
            market_repository=market_repository,
            policy=policy,
            locks=locks,
        ),
        inventory_service=InventoryService(
            market_repository=market_repository,
            inventory_repository=inventory_repository,
        ),
        insights_service=InsightsService(
            feedback_repository=feedback_repository,
            suggestion_repository=suggestion_repository,
            policy=policy,
        ),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    engine = build_engine(
        resolved_settings,
        feedback_repository=SupabaseFeedbackRepository(supabase_client),
        suggestion_repository=SupabaseSuggestionRepository(supabase_client),
        recipe_repository=SupabaseRecipeRepository(supabase_client),
        market_repository=SupabaseMarketRepository(supabase_client),
        inventory_repository=SupabaseInventoryRepository(supabase_client),
    )

    return AppContainer(settings=resolved_settings, engine=engine)
