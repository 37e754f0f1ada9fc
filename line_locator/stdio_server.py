"""MCP stdio server exposing the line locator tool."""

from __future__ import annotations

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from line_locator.config import configure_logging, load_config
from line_locator.locator import find_line_numbers
from line_locator.mcp_constants import TOOL_DESCRIPTION, TOOL_NAME

mcp_server = FastMCP("line-locator")


@mcp_server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
def find_line_numbers_stdio(
    filePath: Annotated[
        str,
        Field(description="The path to the file with the security vulnerability."),
    ],
    snippet: Annotated[
        str, Field(description="The code snippet to search for inside the file.")
    ],
) -> str:
    return find_line_numbers(filePath, snippet).to_json()


def main() -> None:
    configure_logging(load_config().log_level)
    mcp_server.run()


if __name__ == "__main__":
    main()
