"""
Error handling for HTTP endpoints.

``handle_http_errors`` wraps resource endpoints so that every exception is
classified and turned into an error envelope, eliminating duplicate
try/except blocks in handlers. ``register_exception_handlers`` installs the
same translation for errors raised before an endpoint runs (request body
validation, dependencies, unknown routes and methods).
"""

from functools import wraps
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from novels_api.exceptions import AppException
from novels_api.logging import logger
from novels_api.utils.envelope import respond_error
from novels_api.utils.error_classifier import ClassifiedError, classify


def _log_classified(
    origin: str, exc: BaseException, error: ClassifiedError
) -> None:
    if error.status_code >= 500:
        logger.error(
            f"Unhandled error in {origin}: {exc}",
            exc_info=exc,
            extra={"exception_type": type(exc).__name__},
        )
    else:
        logger.warning(
            f"{error.kind} in {origin}: {error.message}",
            extra={
                "exception_type": type(exc).__name__,
                "status_code": error.status_code,
                "fields": error.fields,
            },
        )


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints returning error envelopes on failure.

    Args:
        func: The HTTP endpoint function to wrap.

    Returns:
        Wrapped function that classifies exceptions.

    Example:
        ```python
        @router.post("")
        @handle_http_errors
        async def create_author(data: AuthorCreate, repo: AuthorRepoDep):
            author = await CreateResourceCommand(repo).execute(data)
            return respond("author", serialise_author(author), 201)
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except Exception as ex:
            error = classify(ex)
            _log_classified(func.__name__, ex, error)
            return respond_error(error)

    return wrapper


async def _classified_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    error = classify(exc)
    _log_classified(f"{request.method} {request.url.path}", exc, error)
    response = respond_error(error)
    # Keep protocol headers such as Allow on 405 responses
    headers = getattr(exc, "headers", None)
    if headers:
        response.headers.update(headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route request validation, framework HTTP and application errors through
    the classifier.

    Args:
        app: The application to install the handlers on.
    """
    app.add_exception_handler(
        RequestValidationError, _classified_exception_handler
    )
    app.add_exception_handler(AppException, _classified_exception_handler)
    app.add_exception_handler(
        StarletteHTTPException, _classified_exception_handler
    )
