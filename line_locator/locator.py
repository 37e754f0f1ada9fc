"""Snippet locator: find the line range of a code snippet inside a file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any

from line_locator.errors import McpError
from line_locator.filesystem import Filesystem, LocalFilesystem
from line_locator.matching import find_snippet_range, trim
from line_locator.mcp_constants import (
    EMPTY_SNIPPET_MESSAGE,
    SNIPPET_NOT_FOUND_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)
from line_locator.paths import resolve_within_boundary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocateResult:
    """Either a 1-based inclusive line range or an error message, never both."""

    start_line: int | None = None
    end_line: int | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        has_range = self.start_line is not None and self.end_line is not None
        if has_range == (self.error is not None):
            raise ValueError("LocateResult needs exactly one of a range or an error.")

    @classmethod
    def found(cls, start_line: int, end_line: int) -> LocateResult:
        return cls(start_line=start_line, end_line=end_line)

    @classmethod
    def failure(cls, message: str) -> LocateResult:
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        return {"startLine": self.start_line, "endLine": self.end_line}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def to_tool_result(self) -> dict[str, Any]:
        """Wrap the result in the MCP tool-call content shape."""
        return {"content": [{"type": "text", "text": self.to_json()}]}


def find_line_numbers(
    file_path: str,
    snippet: str,
    *,
    filesystem: Filesystem | None = None,
    boundary: str | None = None,
) -> LocateResult:
    """Locate ``snippet`` inside ``file_path`` under the working directory.

    Every failure is returned as a ``LocateResult`` carrying an error message;
    nothing is raised to the caller.
    """
    if not trim(snippet):
        return LocateResult.failure(EMPTY_SNIPPET_MESSAGE)

    filesystem = filesystem or LocalFilesystem()
    boundary = boundary if boundary is not None else os.getcwd()

    try:
        canonical_path = resolve_within_boundary(boundary, file_path, filesystem)
        content = filesystem.read_text(canonical_path)
    except McpError as exc:
        logger.warning("Rejected path %r: %s", file_path, exc.error.message)
        return LocateResult.failure(exc.error.message)
    except (OSError, UnicodeDecodeError) as exc:
        logger.info("Unable to read %r: %s", file_path, exc)
        return LocateResult.failure(str(exc))
    except Exception:
        logger.exception("Unexpected failure locating snippet in %r", file_path)
        return LocateResult.failure(UNKNOWN_ERROR_MESSAGE)

    match = find_snippet_range(content, snippet)
    if match is None:
        return LocateResult.failure(SNIPPET_NOT_FOUND_MESSAGE)

    start_line, end_line = match
    logger.debug(
        "Located snippet in %s at lines %d-%d", canonical_path, start_line, end_line
    )
    return LocateResult.found(start_line, end_line)
