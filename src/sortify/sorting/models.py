"""Batch-level results of a sorting run."""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from sortify.resolution import BinaryPolicy, FileResolution, Mismatch


class SortResult(BaseModel):
    """Aggregated resolutions for one directory.

    Attributes:
        resolutions: One resolution per file, in processing order.
        policy: Binary policy in effect after the last file.
        dry_run: Whether the batch ran without prompting or moving files.
        extension_only: Whether signature detection was disabled.
    """

    resolutions: List[FileResolution] = Field(default_factory=list)
    policy: BinaryPolicy = BinaryPolicy.ASK_EACH_TIME
    dry_run: bool = False
    extension_only: bool = False

    @property
    def accepted(self) -> list[FileResolution]:
        return [resolution for resolution in self.resolutions if not resolution.skipped]

    @property
    def skipped(self) -> list[Path]:
        return [resolution.path for resolution in self.resolutions if resolution.skipped]

    @property
    def warnings(self) -> list[str]:
        return [warning for resolution in self.resolutions for warning in resolution.warnings]

    @property
    def mismatches(self) -> list[tuple[Path, Mismatch]]:
        return [
            (resolution.path, resolution.mismatch)
            for resolution in self.resolutions
            if resolution.mismatch is not None
        ]


__all__ = ["SortResult"]
