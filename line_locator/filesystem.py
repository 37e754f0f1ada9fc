"""Filesystem capability used by the locator."""

from __future__ import annotations

import os
from typing import Protocol


class Filesystem(Protocol):
    def realpath(self, path: str) -> str:
        """Return the canonical path, raising OSError when it cannot be resolved."""

    def read_text(self, path: str) -> str:
        """Return the full UTF-8 text of a file."""


class LocalFilesystem:
    """Filesystem capability backed by the local disk."""

    def realpath(self, path: str) -> str:
        return os.path.realpath(path, strict=True)

    def read_text(self, path: str) -> str:
        # newline="" keeps "\r" in place so line numbers follow "\n" only.
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
