"""
AttnViz Backend: Request Logging Middleware
==============================================

What:  One access log line per HTTP request.
Why:   uvicorn's access log has no request ID, no duration and no route.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Each line carries the matched route template (`/api/texts/{text_id}`) next to
the concrete path, so requests for different records group together, and
the response size, which for /api/visualize grows with the square of the
token count.

What we log vs what we DON'T log:
    Log:        method, path, route, status, duration, response size,
                client IP, request ID
    Don't log:  request or response bodies (user text)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from attnviz.middleware.request_id import request_id_var

logger = logging.getLogger("attnviz.access")


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request at a level chosen from the response status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.

    Successful answers on QUIET_ROUTES (health polling) drop to DEBUG; a
    failing health check is still logged at its status level.
    """

    QUIET_ROUTES = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # The router records the matched route in the shared scope
        route = request.scope.get("route")
        route_path = getattr(route, "path", None) or request.url.path
        status = response.status_code
        size = response.headers.get("content-length", "-")
        rid = request_id_var.get("")

        level = _status_level(status)
        if route_path in self.QUIET_ROUTES and status < 400:
            level = logging.DEBUG

        logger.log(
            level,
            "%s %s %d %.1fms %sB [%s]",
            request.method,
            request.url.path,
            status,
            duration_ms,
            size,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "route": route_path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "response_bytes": size,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
