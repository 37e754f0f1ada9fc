"""Error values shared by the HTTP tool routes and the path checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class ErrorResponse:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def envelope(self) -> dict[str, Any]:
        """Body returned to HTTP clients for a rejected request."""
        return {"ok": False, "error": self.to_dict()}


class McpError(RuntimeError):
    """Request rejection carrying its error payload and HTTP status."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Mapping[str, Any] | None = None,
        *,
        status_code: int = 400,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = ErrorResponse(code, message, dict(details or {}))


def success_response(payload: dict[str, Any]) -> dict[str, Any]:
    return {"ok": True, "data": payload}
