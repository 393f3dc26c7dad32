import time
import logging
import uuid
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.core.config import settings

logger = logging.getLogger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an X-Request-ID and logs the slow ones.
    Logs: method, path, status_code, duration_ms, request_id
    Only when duration > LOG_SLOW_REQUEST_THRESHOLD_MS
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        status_code = 500
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            status_code = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            if duration_ms > settings.log_slow_request_threshold_ms:
                logger.info(
                    f"Slow request: {request.method} {request.url.path} "
                    f"took {duration_ms:.2f}ms",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": status_code,
                        "duration_ms": round(duration_ms, 2),
                        "request_id": request_id,
                    },
                )

        return response
