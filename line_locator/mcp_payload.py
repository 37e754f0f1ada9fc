"""Argument parsing for tool calls arriving over HTTP."""

from __future__ import annotations

from typing import Any

from line_locator.errors import McpError


def read_string_arguments(payload: Any, fields: tuple[str, ...]) -> dict[str, str]:
    """Return the named string arguments, rejecting any other payload shape.

    Every field in ``fields`` is required and no other keys are accepted.
    """
    if not isinstance(payload, dict):
        raise McpError(
            "INVALID_TYPE",
            "Tool arguments must be an object.",
            {"type": type(payload).__name__},
        )

    unexpected = sorted(set(payload) - set(fields))
    if unexpected:
        raise McpError(
            "UNKNOWN_FIELD", "Unknown fields are not allowed.", {"fields": unexpected}
        )

    missing = [name for name in fields if name not in payload]
    if missing:
        raise McpError(
            "MISSING_FIELD",
            f"Missing required arguments: {', '.join(missing)}.",
            {"fields": missing},
        )

    wrong_type = {
        name: type(payload[name]).__name__
        for name in fields
        if not isinstance(payload[name], str)
    }
    if wrong_type:
        raise McpError(
            "INVALID_TYPE", "Tool arguments must be strings.", {"fields": wrong_type}
        )
    return {name: payload[name] for name in fields}
