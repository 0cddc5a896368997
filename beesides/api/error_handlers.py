"""Error Handlers — app-level hooks for failures raised outside a wrapped operation.

Invariants:
    - Covers what fires before the route body runs: dependency-level
      UnauthorizedError, pydantic RequestValidationError, routing HTTPException
    - Every handler delegates to api/handler.error_to_response (one mapping)
    - Exception (catch-all) → 500 envelope, never leaks internal details
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from beesides.api.handler import error_to_response
from beesides.core.errors import BeesidesError


def _endpoint(request: Request) -> str:
    route = request.scope.get("endpoint")
    if route is not None:
        return f"{route.__module__}.{route.__qualname__}"
    return request.url.path


async def _handle(request: Request, exc: Exception):
    return error_to_response(exc, _endpoint(request), request.url.path)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(BeesidesError, _handle)
    app.add_exception_handler(RequestValidationError, _handle)
    app.add_exception_handler(StarletteHTTPException, _handle)
    app.add_exception_handler(Exception, _handle)
