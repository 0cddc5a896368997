"""Route Handler Wrapper — turns any failure of a domain operation into status + envelope.

Invariants:
    - to_api_error() is the single classification point: BeesidesError passes through,
      framework errors are translated, everything else becomes UnexpectedError
    - UnauthorizedError → 401 "Unauthorized access"; other typed errors → their own
      status and message; untyped exceptions → 500 with a generic message
    - Every caught failure is logged with the endpoint before conversion
    - Successful results are returned untouched (operations build their own envelope)
    - Wrapping an already wrapped operation changes nothing but the log lines

Design Decisions:
    - Decorator (not middleware): FastAPI still sees the operation's signature via
      functools.wraps, so dependency injection and body parsing are unaffected
    - Only Exception is trapped; CancelledError (BaseException) passes through
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from beesides.core.errors import (
    BeesidesError, ErrorKind, ErrorSeverity, NotFoundError, UnauthorizedError,
    UnexpectedError, ValidationFailedError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

_LOCATION_ROOTS = ("body", "query", "path", "header", "cookie")
_VALUE_ERROR_PREFIX = "Value error, "


def format_validation_error(exc: RequestValidationError) -> ValidationFailedError:
    """First pydantic error as '<field>: <reason>'."""
    errors = exc.errors()
    if not errors:
        return ValidationFailedError("Invalid request data", "body")
    first = errors[0]
    if first.get("type") == "json_invalid":
        return ValidationFailedError("body: Invalid JSON", "body")
    loc = [str(part) for part in first.get("loc", ())]
    path = loc[1:] if loc and loc[0] in _LOCATION_ROOTS and len(loc) > 1 else loc
    field = ".".join(path) or "body"
    reason = str(first.get("msg", "Invalid value"))
    if reason.startswith(_VALUE_ERROR_PREFIX):
        reason = reason[len(_VALUE_ERROR_PREFIX):]
    return ValidationFailedError(f"{field}: {reason}", field)


def _from_http_exception(exc: StarletteHTTPException) -> BeesidesError:
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return UnauthorizedError()
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return NotFoundError("Resource", str(exc.detail))
    kind = ErrorKind.VALIDATION if exc.status_code < 500 else ErrorKind.UNEXPECTED
    return BeesidesError(
        str(exc.detail), "HTTP_ERROR", kind,
        ErrorSeverity.WARNING if exc.status_code < 500 else ErrorSeverity.ERROR,
        http_status=exc.status_code,
    )


def to_api_error(exc: Exception) -> BeesidesError:
    """Classify any exception into the error taxonomy."""
    if isinstance(exc, BeesidesError):
        return exc
    if isinstance(exc, RequestValidationError):
        return format_validation_error(exc)
    if isinstance(exc, StarletteHTTPException):
        return _from_http_exception(exc)
    return UnexpectedError(detail=f"{type(exc).__name__}: {exc}")


def _log_failure(
    error: BeesidesError, original: Exception, endpoint: str, path: str | None,
) -> None:
    extra = {
        "endpoint": endpoint,
        "path": path,
        "status_code": error.http_status,
        "error_code": error.code,
        "error_kind": error.kind.value,
        "user_id": error.context.user_id,
        "table": error.context.table,
    }
    summary = f"{endpoint} failed ({error.code}): {error.detail or error.message}"
    if error.kind in (ErrorKind.UPSTREAM, ErrorKind.UNEXPECTED):
        logger.error(summary, extra=extra, exc_info=original)
    else:
        logger.warning(summary, extra=extra)


def error_to_response(
    exc: Exception, endpoint: str, path: str | None = None,
) -> JSONResponse:
    """Log a failure and convert it to an HTTP status + failure envelope."""
    error = to_api_error(exc)
    error.context.endpoint = error.context.endpoint or endpoint
    _log_failure(error, exc, endpoint, path)
    return JSONResponse(
        status_code=error.http_status,
        content=error.to_response(),
        headers={"WWW-Authenticate": "Bearer"} if error.kind == ErrorKind.UNAUTHORIZED else None,
    )


def api_handler(operation: F) -> F:
    """Wrap a route operation so every failure leaves as status + envelope."""
    endpoint = f"{operation.__module__}.{operation.__qualname__}"

    @functools.wraps(operation)
    async def adapter(*args: Any, **kwargs: Any) -> Any:
        try:
            return await operation(*args, **kwargs)
        except Exception as exc:
            return error_to_response(exc, endpoint)

    return adapter  # type: ignore[return-value]
