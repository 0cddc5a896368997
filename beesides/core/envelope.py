"""Response Envelope — the uniform {success, data, error, message} shape.

Invariants:
    - success() always sets success=True, always carries `data` (may be None), never `error`
    - failure() always sets success=False, carries `error`, never `data`
    - `message` appears only when given
"""

from typing import Any


def success(data: Any = None, message: str | None = None) -> dict:
    """Build a success envelope."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


def failure(error: str, message: str | None = None) -> dict:
    """Build a failure envelope."""
    body: dict[str, Any] = {"success": False, "error": error}
    if message:
        body["message"] = message
    return body

