"""Batch driver that resolves every file in a directory."""

from .models import SortResult
from .pipeline import SortingPipeline

__all__ = ["SortResult", "SortingPipeline"]
