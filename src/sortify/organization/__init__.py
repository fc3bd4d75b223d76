"""Plan and apply moves into category folders."""

from .errors import OrganizationError
from .executor import OperationExecutor
from .models import MoveOperation, OperationEvent, OperationPlan
from .planner import SortPlanner

__all__ = [
    "MoveOperation",
    "OperationEvent",
    "OperationExecutor",
    "OperationPlan",
    "OrganizationError",
    "SortPlanner",
]
