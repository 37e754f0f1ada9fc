"""Line indexing and ordered multi-line snippet matching."""

from __future__ import annotations

import re

# Whitespace plus U+FEFF, which a UTF-8 BOM leaves at the start of line 1.
_EDGE_BLANKS = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")


def trim(text: str) -> str:
    return _EDGE_BLANKS.sub("", text)


def build_line_index(lines: list[str]) -> dict[str, list[int]]:
    """Map each trimmed line to the ascending 1-based numbers that produce it."""
    index: dict[str, list[int]] = {}
    for line_number, line in enumerate(lines, start=1):
        index.setdefault(trim(line), []).append(line_number)
    return index


def find_snippet_range(content: str, snippet: str) -> tuple[int, int] | None:
    """Return the first (start, end) range whose trimmed lines equal the snippet.

    Comparison trims each line on both sides and is otherwise exact. The
    snippet is trimmed as a whole first so surrounding blank lines do not
    take part in the match.
    """
    lines = content.split("\n")
    snippet_lines = trim(snippet).split("\n")
    snippet_line_count = len(snippet_lines)

    index = build_line_index(lines)
    candidates = index.get(trim(snippet_lines[0]))
    if not candidates:
        return None

    for start_line in candidates:
        if _matches_at(lines, snippet_lines, start_line):
            return start_line, start_line + snippet_line_count - 1
    return None


def _matches_at(lines: list[str], snippet_lines: list[str], start_line: int) -> bool:
    for offset in range(1, len(snippet_lines)):
        file_index = start_line - 1 + offset
        if file_index >= len(lines):
            return False
        if trim(lines[file_index]) != trim(snippet_lines[offset]):
            return False
    return True
