"""Organization plan data models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class MoveOperation(BaseModel):
    """Represents moving a file into its category folder.

    Attributes:
        source: File path before the move.
        destination: File path after the move.
        category: Folder name of the destination category.
        conflict_applied: Whether the file name was changed to avoid a collision.
    """

    source: Path
    destination: Path
    category: str
    conflict_applied: bool = False


class OperationPlan(BaseModel):
    """Ordered moves for one batch plus notes for the user."""

    moves: List[MoveOperation] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


class OperationEvent(BaseModel):
    """Record of a move that was applied.

    Attributes:
        timestamp: When the move happened.
        source: Original path.
        destination: Final path.
        notes: Optional free-form notes.
    """

    timestamp: datetime
    source: str
    destination: str
    notes: List[str] = Field(default_factory=list)
    category: Optional[str] = None


__all__ = ["MoveOperation", "OperationPlan", "OperationEvent"]
