"""Middleware that attaches request details to the structured log context."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from novels_api.logging import clear_log_context, logger, set_log_context


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """
    Populate the log context with the HTTP method and path.

    The context is cleared once the response is produced so values never
    leak between requests.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        set_log_context(method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
            logger.debug(
                f"{request.method} {request.url.path} -> {response.status_code}"
            )
            return response
        finally:
            clear_log_context()
