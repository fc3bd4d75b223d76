"""Bounded prefix sampling."""

from __future__ import annotations

from pathlib import Path

from sortify.config.models import MAX_PREFIX_BYTES

from .errors import PrefixReadError


def read_prefix(path: Path, cap: int = MAX_PREFIX_BYTES) -> bytes:
    """Return up to ``cap`` leading bytes of ``path``.

    Raises:
        PrefixReadError: If the file cannot be opened, inspected, or read.
    """
    try:
        with path.open("rb") as handle:
            size = path.stat().st_size
            return handle.read(min(cap, size))
    except OSError as exc:
        raise PrefixReadError(path, exc.strerror or str(exc)) from exc
