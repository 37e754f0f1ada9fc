"""HTTP routes for the line locator tool and its published definition."""

from __future__ import annotations

from typing import Any

from line_locator.errors import McpError, success_response
from line_locator.locator import find_line_numbers
from line_locator.mcp_constants import TOOL_FIELDS, TOOL_NAME
from line_locator.mcp_payload import read_string_arguments
from line_locator.mcp_router import mcp_router
from tools.mcp_tools import ToolSchemaError, load_tool_definitions


@mcp_router.post(f"/tool:{TOOL_NAME}")
def find_line_numbers_tool(payload: dict[str, Any]) -> dict[str, Any]:
    """Find the line range of a snippet in a file under the working directory."""
    arguments = read_string_arguments(payload, TOOL_FIELDS)
    result = find_line_numbers(arguments["filePath"], arguments["snippet"])
    return result.to_tool_result()


@mcp_router.get("/tools")
def list_tool_schemas() -> dict[str, Any]:
    try:
        tools = load_tool_definitions()
    except ToolSchemaError as exc:
        raise McpError(
            "TOOL_SCHEMA_ERROR",
            "Tool definitions could not be loaded.",
            {"error": str(exc)},
            status_code=500,
        ) from exc
    return success_response({"tools": tools})
