"""Category lookup for resolved file types."""

from .categories import CATEGORY_BY_LABEL, MISMATCH_LABEL, Category, category_for

__all__ = ["Category", "CATEGORY_BY_LABEL", "MISMATCH_LABEL", "category_for"]
