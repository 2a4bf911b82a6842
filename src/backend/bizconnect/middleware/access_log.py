"""
Structured access log line for every request.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from bizconnect.core.logging import get_logger


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration; ``exclude_paths`` are skipped."""

    def __init__(self, app: ASGIApp, *, exclude_paths: set[str] | None = None) -> None:
        super().__init__(app)
        self._exclude = exclude_paths or set()
        self._log = get_logger("access")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path in self._exclude:
            return await call_next(request)

        start = time.perf_counter()
        method = request.method.upper()
        client_host = request.client.host if request.client else None

        try:
            response = await call_next(request)
        except Exception:
            self._log.exception(
                "request_error",
                http_method=method,
                path=path,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
                client_ip=client_host,
                user_id=getattr(request.state, "user_id", None),
            )
            raise

        self._log.info(
            "request",
            http_method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
            client_ip=client_host,
            user_id=getattr(request.state, "user_id", None),
        )
        return response
