"""
Health check router.

Liveness probe. Does not touch the store.
"""

from fastapi import APIRouter, Request

from redcoins.interfaces.ledger.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
def health_check(request: Request) -> HealthResponse:
    return HealthResponse(status="ok", version=request.app.state.settings.version)
