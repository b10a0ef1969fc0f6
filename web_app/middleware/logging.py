"""Access logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

ACCESS_LOGGER = "tinylink.web.access"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request under ``tinylink.web.access``.

    Server errors log at WARNING so they surface at the default level;
    redirects, which are most of the traffic, stay at DEBUG.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger(ACCESS_LOGGER)

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"{request.method} {request.url.path} from {client_ip} - unhandled error")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code

        if status_code >= 500:
            level = logging.WARNING
        elif 300 <= status_code < 400:
            level = logging.DEBUG
        else:
            level = logging.INFO

        self.logger.log(
            level,
            f"{request.method} {request.url.path} {status_code} {duration_ms:.1f}ms from {client_ip}",
            extra={
                "http_method": request.method,
                "http_path": request.url.path,
                "http_status": status_code,
                "http_duration_ms": round(duration_ms, 1),
                "http_client": client_ip,
            },
        )

        return response
