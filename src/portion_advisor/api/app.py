"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from portion_advisor.api.admin import router as admin_router
from portion_advisor.api.models import FeedbackEventPayload
from portion_advisor.api.serializers import (
    serialize_analysis,
    serialize_apply_result,
    serialize_insights,
    serialize_suggestion,
)
from portion_advisor.app_logging import configure_logging
from portion_advisor.containers import AppContainer
from portion_advisor.domain.errors import (
    InvalidSuggestionState,
    NotFoundError,
    StoreUnavailable,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidSuggestionState)
    async def invalid_state(
        _request: Request, exc: InvalidSuggestionState
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable(
        _request: Request, exc: StoreUnavailable
    ) -> JSONResponse:
        logger.error("Store unavailable: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Store unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/recipes/{recipe_id}/analysis")
    async def recipe_analysis(recipe_id: str, request: Request) -> dict[str, object]:
        """Return the current feedback analysis for a recipe."""
        state_container: AppContainer = request.app.state.container
        analysis = await state_container.engine.analyze_recipe(recipe_id)
        if analysis is None:
            raise NotFoundError(f"No recent feedback for recipe {recipe_id}")
        return serialize_analysis(analysis)

    @app.post("/feedback")
    async def feedback_saved(
        payload: FeedbackEventPayload, request: Request
    ) -> dict[str, object]:
        """Analyze a feedback event the host app has just stored."""
        state_container: AppContainer = request.app.state.container
        touched = await state_container.engine.on_feedback_saved(payload.to_event())
        return {"suggestions": [serialize_suggestion(entry) for entry in touched]}

    @app.get("/suggestions")
    async def pending_suggestions(request: Request) -> dict[str, object]:
        """Return suggestions awaiting review."""
        state_container: AppContainer = request.app.state.container
        pending = await state_container.engine.list_pending()
        return {"suggestions": [serialize_suggestion(entry) for entry in pending]}

    @app.post("/suggestions/{suggestion_id}/apply")
    async def apply_suggestion(
        suggestion_id: str, request: Request
    ) -> dict[str, object]:
        """Apply a pending suggestion."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.engine.apply_suggestion(suggestion_id)
        return serialize_apply_result(result)

    @app.post(
        "/suggestions/{suggestion_id}/dismiss",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def dismiss_suggestion(suggestion_id: str, request: Request) -> Response:
        """Dismiss a pending suggestion."""
        state_container: AppContainer = request.app.state.container
        await state_container.engine.dismiss_suggestion(suggestion_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/insights")
    async def insights(request: Request) -> dict[str, object]:
        """Return a summary of learned patterns."""
        state_container: AppContainer = request.app.state.container
        return serialize_insights(await state_container.engine.learning_insights())

    return app
