"""Organization errors."""


class OrganizationError(Exception):
    """Raised when a planned move cannot be carried out."""
