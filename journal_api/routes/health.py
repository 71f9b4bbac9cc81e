"""
Daily Journal API - Health Check Route
========================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs one connect/disconnect cycle through DatabaseLifecycle, the same
       path every entry request takes, and reports the outcome.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    healthy:   database reachable
    unhealthy: database unreachable (still HTTP 200; the body carries the verdict)
"""

import logging
import time

from fastapi import APIRouter

from journal_api import __version__
from journal_api.database import DatabaseLifecycle, release
from journal_api.exceptions import DatabaseConnectionError
from journal_api.schemas.entry import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the service can reach its database.",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    lifecycle = DatabaseLifecycle()
    try:
        await lifecycle.connect()
    except DatabaseConnectionError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", e.context.get("error", e.message))
    finally:
        await release(lifecycle)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
