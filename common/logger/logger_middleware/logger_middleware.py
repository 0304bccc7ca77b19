# common/logger/logger_middleware/logger_middleware.py
"""
One structured log event per HTTP request.

Usage Example:
    app.add_middleware(
        RequestLoggingMiddleware,
        slow_request_threshold=500,
        redact_params=("search", "q"),
    )
"""

from typing import Callable, Awaitable, Iterable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import time
import uuid

from ..logger import get_app_logger
from .middleware_types import RequestArea, RequestMetadata, RequestDetails, RequestLogEntry

# Search boxes on the admin pages take patient names, emails and phones
DEFAULT_REDACTED_PARAMS = ("search",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Sets X-Request-ID (the caller's, when sent) and Server-Timing on every
    response, then logs:
    - ERROR: 5xx responses
    - WARNING: slow requests and 4xx responses
    - INFO: everything else
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        slow_request_threshold: float = 1000.0,
        redact_params: Iterable[str] = DEFAULT_REDACTED_PARAMS,
        log_client_info: bool = True,
        logger_name: Optional[str] = None,
    ):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.redact_params = frozenset(redact_params)
        self.log_client_info = log_client_info
        self.logger = get_app_logger(name=logger_name or __name__, track_timing=True)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        response.headers["X-Request-ID"] = request_id
        response.headers["Server-Timing"] = f"total;dur={duration_ms:.2f}"

        self._log_request(self._build_log_entry(request, response, duration_ms, request_id))
        return response

    def _query_params(self, request: Request) -> Optional[dict[str, str]]:
        if not request.query_params:
            return None
        return {
            key: f"<{len(value)} chars>" if key in self.redact_params else value
            for key, value in request.query_params.items()
        }

    def _build_log_entry(
        self,
        request: Request,
        response: Response,
        duration_ms: float,
        request_id: str,
    ) -> RequestLogEntry:
        path = request.url.path
        client = request.client if self.log_client_info else None
        return RequestLogEntry(
            metadata=RequestMetadata(
                method=request.method,
                path=path,
                area=RequestArea.for_path(path),
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            ),
            details=RequestDetails(
                request_id=request_id,
                client_host=client.host if client else None,
                user_agent=request.headers.get("user-agent") if self.log_client_info else None,
                query_params=self._query_params(request),
                authenticated=request.headers.get("authorization", "").lower().startswith("bearer "),
            ),
            slow_threshold_ms=self.slow_request_threshold,
        )

    def _log_request(self, log_entry: RequestLogEntry) -> None:
        log_data = log_entry.model_dump(mode="json", exclude_none=True)
        status_code = log_entry.metadata.status_code

        if log_entry.is_error:  # type: ignore[truthy-function]
            self.logger.error("Request failed with server error", **log_data)
        elif log_entry.is_slow:  # type: ignore[truthy-function]
            self.logger.warning(
                f"Slow request detected ({log_entry.metadata.duration_ms}ms)",
                **log_data,
            )
        elif status_code in (401, 403):
            self.logger.warning("Admin access refused", **log_data)
        elif status_code >= 400:
            self.logger.warning("Request failed with client error", **log_data)
        else:
            self.logger.info("Request completed", **log_data)


__all__ = ["RequestLoggingMiddleware", "DEFAULT_REDACTED_PARAMS"]
