"""
Chirper Backend: Access Log Middleware
======================================

What:  Writes one access log line per API request to the `chirper.access` logger.
How:   Times the downstream call and reads the outcome: status code, request
       id, and the caller's user id when get_current_user resolved one.
When:  Sits inside RequestIDMiddleware, so request_id_var is already set.

    POST /api/tweets 201 12.4ms user=1 [3f9a0c1e]
    POST /api/tweets 401 1.1ms user=- [77b2d4aa]

Level by outcome: 5xx or exception → ERROR, 4xx → WARNING, else INFO.
Tweet bodies and tokens never reach this log.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from chirper.middleware.request_id import request_id_var

logger = logging.getLogger("chirper.access")

# Probed every few seconds by load balancers
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._write(request, 500, started, failed=True)
            raise

        self._write(request, response.status_code, started)
        return response

    @staticmethod
    def _write(request: Request, status: int, started: float, failed: bool = False) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get("")
        # Set by get_current_user once the bearer token resolves to a user
        user_id = getattr(request.state, "user_id", None)

        logger.log(
            logging.ERROR if failed else level_for_status(status),
            "%s %s %d %.1fms user=%s [%s]%s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            user_id if user_id is not None else "-",
            rid,
            " (unhandled exception)" if failed else "",
            extra={
                "request_id": rid,
                "user_id": user_id,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
