"""Detection errors."""

from __future__ import annotations

from pathlib import Path


class DetectionError(Exception):
    """Base exception for content sniffing failures."""


class PrefixReadError(DetectionError):
    """Raised when the leading bytes of a file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read header from {path}: {reason}")
        self.path = path
