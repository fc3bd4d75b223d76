"""Planner for category moves."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Literal

from sortify.resolution import FileResolution

from .models import MoveOperation, OperationPlan

LOGGER = logging.getLogger(__name__)

ConflictStrategy = Literal["append_number", "timestamp"]
MAX_NUMBERED_CANDIDATES = 9999


class SortPlanner:
    """Derive move operations from resolved files."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def build_plan(
        self,
        resolutions: Iterable[FileResolution],
        root: Path,
        *,
        conflict_strategy: ConflictStrategy = "append_number",
    ) -> OperationPlan:
        """Plan one move per non-skipped file into ``root / <category folder>``.

        Destinations already on disk or claimed earlier in the same plan are
        avoided by adding a numeric or timestamp suffix to the file stem.
        """
        plan = OperationPlan()
        occupied: set[Path] = set()

        for resolution in resolutions:
            category = resolution.category
            if category is None:
                continue

            candidate = root / category.dir_name / resolution.path.name
            destination = self._resolve_conflict(candidate, occupied, conflict_strategy)
            occupied.add(destination)
            conflict_applied = destination != candidate
            if conflict_applied:
                LOGGER.warning("File already exists: %s; renaming to %s", candidate, destination.name)
                plan.notes.append(f"{candidate.name} renamed to {destination.name} in {category.dir_name}")

            plan.moves.append(
                MoveOperation(
                    source=resolution.path,
                    destination=destination,
                    category=category.dir_name,
                    conflict_applied=conflict_applied,
                )
            )

        return plan

    def _resolve_conflict(
        self, candidate: Path, occupied: set[Path], strategy: ConflictStrategy
    ) -> Path:
        def taken(path: Path) -> bool:
            return path in occupied or path.exists()

        if not taken(candidate):
            return candidate

        if strategy == "append_number":
            for counter in range(1, MAX_NUMBERED_CANDIDATES + 1):
                numbered = _with_suffix(candidate, str(counter))
                if not taken(numbered):
                    return numbered

        stamp = int(self._clock())
        stamped = _with_suffix(candidate, str(stamp))
        while taken(stamped):
            stamp += 1
            stamped = _with_suffix(candidate, str(stamp))
        return stamped


def _with_suffix(path: Path, marker: str) -> Path:
    if path.suffix:
        return path.with_name(f"{path.stem}_{marker}{path.suffix}")
    return path.with_name(f"{path.name}_{marker}")


__all__ = ["ConflictStrategy", "SortPlanner"]
