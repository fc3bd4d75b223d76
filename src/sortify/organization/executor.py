"""Executor for organization plans."""

from __future__ import annotations

from datetime import datetime, timezone

from .errors import OrganizationError
from .models import OperationEvent, OperationPlan


class OperationExecutor:
    """Apply move plans in order, stopping at the first failure."""

    def apply(self, plan: OperationPlan, dry_run: bool = False) -> list[OperationEvent]:
        """Move every planned file into its category folder.

        Args:
            plan: Operation plan computed by the planner.
            dry_run: When true, validate sources only and move nothing.

        Returns:
            list[OperationEvent]: One event per applied move.

        Raises:
            OrganizationError: If a source is missing, a destination appeared
                since planning, or the filesystem rejects the move.
        """
        for move_op in plan.moves:
            if not move_op.source.exists():
                raise OrganizationError(f"Source path is missing: {move_op.source}")

        if dry_run:
            return []

        events: list[OperationEvent] = []
        for move_op in plan.moves:
            destination = move_op.destination
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise OrganizationError(f"cannot create dir {destination.parent}: {exc}") from exc
            if destination.exists():
                raise OrganizationError(f"Destination already exists: {destination}")
            try:
                move_op.source.rename(destination)
            except OSError as exc:
                raise OrganizationError(
                    f"cannot move {move_op.source} to {destination}: {exc}"
                ) from exc

            notes = ["renamed to avoid a name collision"] if move_op.conflict_applied else []
            events.append(
                OperationEvent(
                    timestamp=datetime.now(timezone.utc),
                    source=str(move_op.source),
                    destination=str(destination),
                    category=move_op.category,
                    notes=notes,
                )
            )
        return events
