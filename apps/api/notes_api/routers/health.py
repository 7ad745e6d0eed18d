"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy import Engine, text

from notes_api import __version__
from notes_api.auth.request_auth import get_settings
from notes_api.config import Settings
from notes_api.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])
logger = logging.getLogger(__name__)


def check_database(engine: Engine) -> str:
    """Check database connectivity.

    Returns:
        str: "up" if healthy, "down" otherwise (details are logged, not returned)
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "up"
    except Exception as e:
        logger.error(
            "Database health check failed",
            extra={"event": "health.database.down", "error_type": type(e).__name__},
        )
        return "down"


@router.get("/health", response_model=HealthResponse)
def health_check(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns 503 if the database is unreachable.
    """
    services = {"api": "up", "database": check_database(request.app.state.engine)}
    healthy = all(svc_status == "up" for svc_status in services.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        environment=settings.app_env,
        services=services,
    )
