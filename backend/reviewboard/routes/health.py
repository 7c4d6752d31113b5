"""
Review Board Backend — Health Check Route
==========================================

What:  Liveness/readiness probe for process supervisors and load balancers.
How:   Runs SELECT 1 through the ReviewService (so it queues behind the
       shared lock like any other store access) and reports the result.

Status levels:
    - healthy:   store answered (HTTP 200)
    - unhealthy: store did not answer (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from reviewboard import __version__
from reviewboard.exceptions import DatabaseError
from reviewboard.routes.reviews import get_review_service
from reviewboard.schemas.review import HealthResponse
from reviewboard.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    service: ReviewService = Depends(get_review_service),
):
    db_status = "connected"
    overall = "healthy"

    try:
        await service.ping()
    except DatabaseError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: review store unreachable: %s", e.context)

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
