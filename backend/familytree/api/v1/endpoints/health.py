"""Health check endpoints."""

from fastapi import Response

from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.config import settings
from familytree.core.health.protocols import HealthServiceProtocol
from familytree.schemas.health import LivenessResponse, ReadinessResponse

router = TrailingSlashRouter()


@router.get("")
async def health_check() -> dict[str, str]:
    """Check if the API is healthy.

    Returns:
    --------
        dict: A dictionary containing the status of the API.
    """
    return {"status": "healthy"}


@router.get("/live")
async def liveness() -> LivenessResponse:
    """Liveness probe. Confirms the process is running."""
    return LivenessResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    health: HealthServiceProtocol = Inject(HealthServiceProtocol),
) -> ReadinessResponse:
    """Readiness probe. Checks the database."""
    result = await health.check_readiness(debug=settings.DEBUG)

    if result.status != "ready":
        response.status_code = 503
    return result
