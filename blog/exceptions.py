"""Exceptions raised while reading blog content."""

from __future__ import annotations

from pathlib import Path


class FrontMatterError(ValueError):
    """Front matter is missing or malformed."""

    def __init__(self, message: str, path: str | Path | None = None, line: int | None = None):
        self.path = str(path) if path is not None else None
        self.line = line
        location = ""
        if self.path:
            location = f"{self.path}:{line}: " if line else f"{self.path}: "
        elif line:
            location = f"line {line}: "
        super().__init__(f"{location}{message}")
        self.reason = message
