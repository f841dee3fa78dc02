"""
AttnViz Backend: Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the text store with SELECT 1 and reports the result.

Status levels:
    - healthy:   Database reachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from attnviz import __version__
from attnviz.dependencies import get_text_store
from attnviz.schemas.text import HealthResponse
from attnviz.services.text_store import TextStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Uptime is measured from module import
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: TextStore = Depends(get_text_store),
) -> HealthResponse:
    connected = await store.ping()
    if not connected:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
