"""Tool handler registration."""

# ruff: noqa: F401

from __future__ import annotations

from fastapi import FastAPI

from line_locator.mcp_router import mcp_router

# Import modules to register routes with the shared router.
from line_locator import mcp_locator

# Re-export endpoints for tests and direct imports.
from line_locator.mcp_locator import find_line_numbers_tool, list_tool_schemas


def register_mcp_handlers(app: FastAPI) -> None:
    """Attach tool routes to the FastAPI application."""
    app.include_router(mcp_router)
