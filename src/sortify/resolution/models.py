"""Data models produced by type resolution."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from sortify.classification import Category, category_for

UNKNOWN_TYPE = "unknown"


class BinaryPolicy(str, Enum):
    """Batch-wide answer to "what do we do with binary files?"."""

    ASK_EACH_TIME = "ask_each_time"
    SKIP_ALL = "skip_all"
    NEVER_SKIP = "never_skip"


class BinaryAction(str, Enum):
    """Per-file decision taken for a binary file."""

    SKIP = "skip"
    PROCESS = "process"


class ConflictChoice(str, Enum):
    """Answers to the signature/extension conflict prompt, in menu order."""

    SKIP = "skip"
    BY_SIGNATURE = "by_signature"
    BY_EXTENSION = "by_extension"
    MANUAL = "manual"


class Mismatch(BaseModel):
    """Detected and declared types that disagree for one file.

    Attributes:
        detected: Type reported by the signature tables.
        declared: Type implied by the filename extension.
    """

    detected: str
    declared: str


class FileResolution(BaseModel):
    """Final classification of a single file.

    Attributes:
        path: File that was resolved.
        declared: Lowercase filename extension, if any.
        detected: Signature-based type, if any.
        outcome: ``accept``, ``skip``, or ``mismatch``.
        file_type: Type label used for categorisation; None when skipped.
        mismatch: Detected/declared pair when the two signals disagreed and
            the file was not settled by an explicit choice.
        binary: Whether the file was judged binary.
        skip_reason: Why the file was skipped, when it was.
        warnings: Messages to show in the end-of-run summary.
    """

    path: Path
    declared: Optional[str] = None
    detected: Optional[str] = None
    outcome: Literal["accept", "skip", "mismatch"]
    file_type: Optional[str] = None
    mismatch: Optional[Mismatch] = None
    binary: bool = False
    skip_reason: Optional[Literal["conflict", "binary"]] = None
    warnings: List[str] = Field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.outcome == "skip"

    @property
    def category(self) -> Optional[Category]:
        """Return the destination category, or None for skipped files."""
        if self.skipped or self.file_type is None:
            return None
        return category_for(self.file_type)


__all__ = [
    "UNKNOWN_TYPE",
    "BinaryPolicy",
    "BinaryAction",
    "ConflictChoice",
    "Mismatch",
    "FileResolution",
]
