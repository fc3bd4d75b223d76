"""Signature/extension reconciliation and the binary-file policy."""

from .errors import PromptError, ResolutionError
from .models import (
    UNKNOWN_TYPE,
    BinaryAction,
    BinaryPolicy,
    ConflictChoice,
    FileResolution,
    Mismatch,
)
from .policy import decide
from .prompts import (
    BINARY_OPTIONS,
    ConsolePrompter,
    Prompter,
    ask_binary_policy,
    ask_conflict_resolution,
)
from .resolver import TypeResolver

__all__ = [
    "BINARY_OPTIONS",
    "UNKNOWN_TYPE",
    "BinaryAction",
    "BinaryPolicy",
    "ConflictChoice",
    "ConsolePrompter",
    "FileResolution",
    "Mismatch",
    "Prompter",
    "PromptError",
    "ResolutionError",
    "TypeResolver",
    "ask_binary_policy",
    "ask_conflict_resolution",
    "decide",
]
