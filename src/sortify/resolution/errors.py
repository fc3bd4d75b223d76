"""Resolution errors."""


class ResolutionError(Exception):
    """Base exception for per-file type resolution failures."""


class PromptError(ResolutionError):
    """Raised when an interactive choice cannot be read."""
