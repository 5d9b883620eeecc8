"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from portion_advisor.api.serializers import serialize_suggestion

if TYPE_CHECKING:
    from portion_advisor.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/rescan", dependencies=[Depends(require_admin)])
async def rescan(request: Request) -> dict[str, object]:
    """Run the batch analysis over every recipe with feedback."""
    container: AppContainer = request.app.state.container
    created = await container.engine.rescan_all()
    return {"created": [serialize_suggestion(entry) for entry in created]}
