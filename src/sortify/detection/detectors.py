"""Content type detection over a sampled byte prefix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sortify.config.models import MAX_PREFIX_BYTES

from .containers import detect_container
from .prefix import read_prefix
from .signatures import (
    BINARY_FORMATS,
    binary_indicator_label,
    match_binary_indicator,
    match_fixed,
)
from .text import detect_json, looks_binary

LOGGER = logging.getLogger(__name__)


def detect_type(prefix: bytes) -> Optional[str]:
    """Return the content type label for ``prefix`` or None when nothing matches.

    Containers are checked first, then the JSON shape, then the fixed signature
    table, and finally the binary-indicating table.
    """
    if not prefix:
        return None
    return (
        detect_container(prefix)
        or detect_json(prefix)
        or match_fixed(prefix)
        or binary_indicator_label(prefix)
    )


def is_binary_prefix(prefix: bytes) -> bool:
    """Return True when the prefix belongs to a binary format or looks non-textual."""
    if not prefix:
        return False
    if match_binary_indicator(prefix):
        return True
    if detect_container(prefix) is not None or match_fixed(prefix) in BINARY_FORMATS:
        return True
    if detect_json(prefix) is not None:
        return False
    return looks_binary(prefix)


def declared_extension(path: Path) -> Optional[str]:
    """Return the lowercase suffix of ``path`` without the dot, if it has one."""
    suffix = path.suffix
    return suffix[1:].lower() if suffix else None


@dataclass(frozen=True, slots=True)
class SniffResult:
    """Everything learned about a file from its name and leading bytes.

    Attributes:
        path: File that was inspected.
        declared: Lowercase filename extension, or None.
        detected: Content type from the signature tables, or None.
        binary: Whether the sampled bytes indicate a non-text file.
        sampled_bytes: Number of bytes that were read.
    """

    path: Path
    declared: Optional[str]
    detected: Optional[str]
    binary: bool
    sampled_bytes: int


class TypeDetector:
    """Sniff files by reading a bounded prefix once per file.

    The detector holds no mutable state, so one instance may be shared across
    threads.
    """

    def __init__(self, prefix_bytes: int = MAX_PREFIX_BYTES) -> None:
        if not 1 <= prefix_bytes <= MAX_PREFIX_BYTES:
            raise ValueError(f"prefix_bytes must be between 1 and {MAX_PREFIX_BYTES}.")
        self.prefix_bytes = prefix_bytes

    def sniff(self, path: Path) -> SniffResult:
        """Read the prefix of ``path`` and classify it.

        Raises:
            PrefixReadError: If the file cannot be read.
        """
        prefix = read_prefix(path, self.prefix_bytes)
        result = SniffResult(
            path=path,
            declared=declared_extension(path),
            detected=detect_type(prefix),
            binary=is_binary_prefix(prefix),
            sampled_bytes=len(prefix),
        )
        LOGGER.debug(
            "Sniffed %s: detected=%s declared=%s binary=%s",
            path.name,
            result.detected,
            result.declared,
            result.binary,
        )
        return result


__all__ = [
    "SniffResult",
    "TypeDetector",
    "declared_extension",
    "detect_type",
    "is_binary_prefix",
]
