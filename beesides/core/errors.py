"""Error Hierarchy — typed, categorized exceptions for every Beesides failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity), http_status
    - ErrorKind is the tagged union the route handler wrapper dispatches on
      (never string-matched messages)
    - to_response() produces the failure envelope {success: false, error}
    - `message` is user-facing; upstream internals live in `detail` and reach logs only

Design Decisions:
    - Single hierarchy with BeesidesError base: the wrapper and the app-level
      handlers convert it through one function (api/handler.py)
    - NotFoundError has one message per resource whether the row is absent or
      owned by someone else
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from beesides.core.envelope import failure


class ErrorKind(str, Enum):
    """Tagged variants of the error taxonomy."""
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    UNEXPECTED = "unexpected"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Debug context attached to an error; logged, never returned."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    endpoint: str | None = None
    user_id: str | None = None
    table: str | None = None
    debug_info: dict[str, Any] | None = None


UNAUTHORIZED_MESSAGE = "Unauthorized access"
UNEXPECTED_MESSAGE = "An unexpected error occurred"


class BeesidesError(Exception):
    """Base exception for all Beesides errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.detail = detail

    def to_response(self) -> dict:
        """Convert to the failure envelope."""
        return failure(self.message)


# ─── Caller Errors (400-level) ──────────────────────────────────

class UnauthorizedError(BeesidesError):
    """No Principal could be resolved from the request session."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            UNAUTHORIZED_MESSAGE, "UNAUTHORIZED", ErrorKind.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


class ValidationFailedError(BeesidesError):
    """Malformed, missing or out-of-range input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorKind.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(BeesidesError):
    """Referenced entity is absent or not owned by the caller."""
    def __init__(
        self, resource: str, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource} not found",
            "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource = resource


# ─── Upstream Errors ────────────────────────────────────────────

class PersistenceError(BeesidesError):
    """The hosted data store rejected or failed an operation."""
    def __init__(
        self, detail: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Failed to {operation}: {detail}",
            "PERSISTENCE_ERROR", ErrorKind.UPSTREAM,
            ErrorSeverity.ERROR, context, 400, detail,
        )
        self.operation = operation


class MetadataProviderError(BeesidesError):
    """The catalog search provider failed; its detail is not exposed."""
    def __init__(
        self, detail: str, public_message: str = "Failed to search for albums",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            public_message, "METADATA_PROVIDER_ERROR", ErrorKind.UPSTREAM,
            ErrorSeverity.ERROR, context, 500, detail,
        )


class UnexpectedError(BeesidesError):
    """Any failure without a structured kind."""
    def __init__(self, detail: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            UNEXPECTED_MESSAGE, "INTERNAL_ERROR", ErrorKind.UNEXPECTED,
            ErrorSeverity.CRITICAL, context, 500, detail,
        )
