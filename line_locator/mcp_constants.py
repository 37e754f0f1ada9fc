"""Shared constants for the line locator tool."""

from __future__ import annotations

TOOL_NAME = "find_line_numbers"
TOOL_DESCRIPTION = "Finds the line numbers of a code snippet in a file."
TOOL_FIELDS = ("filePath", "snippet")

OUTSIDE_BOUNDARY_MESSAGE = "File path is outside of the current working directory."
EMPTY_SNIPPET_MESSAGE = "Snippet is empty."
SNIPPET_NOT_FOUND_MESSAGE = "Snippet was not found."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
