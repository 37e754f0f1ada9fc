"""Path validation utilities for enforcing the working directory boundary."""

from __future__ import annotations

import os

from line_locator.errors import McpError
from line_locator.filesystem import Filesystem
from line_locator.mcp_constants import OUTSIDE_BOUNDARY_MESSAGE


def resolve_within_boundary(
    boundary: str, raw_path: str, filesystem: Filesystem
) -> str:
    """Canonicalize a user-supplied path and require it to sit under boundary.

    The containment check runs on the canonical path, so a symlink living
    inside the boundary that points outside of it is rejected. Errors from
    canonicalization propagate as OSError.
    """
    absolute = os.path.abspath(os.path.join(boundary, raw_path))
    canonical = filesystem.realpath(absolute)

    if not is_strict_descendant(boundary, canonical):
        raise McpError(
            "PATH_OUTSIDE_BOUNDARY",
            OUTSIDE_BOUNDARY_MESSAGE,
            {"path": raw_path},
        )
    return canonical


def is_strict_descendant(boundary: str, candidate: str) -> bool:
    prefix = boundary if boundary.endswith(os.sep) else boundary + os.sep
    return candidate.startswith(prefix)
