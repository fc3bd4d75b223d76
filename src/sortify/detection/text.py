"""Heuristics for JSON-shaped and generally textual prefixes."""

from __future__ import annotations

from typing import Optional

UTF8_BOM = b"\xef\xbb\xbf"
BINARY_RATIO_THRESHOLD = 0.30

_WHITESPACE = frozenset(b" \t\n\r\x0c")
_JSON_OPENERS = frozenset(b"{[")
_JSON_PUNCTUATION = frozenset(b'":,')
_TEXT_BYTES = frozenset(b"\t\n\r") | frozenset(range(0x20, 0x7F))


def detect_json(prefix: bytes) -> Optional[str]:
    """Return ``"json"`` when the prefix opens like a JSON object or array.

    The first non-whitespace byte (after an optional UTF-8 BOM) must be ``{`` or
    ``[`` and the sample must contain at least one quote, colon or comma.
    """
    body = prefix[len(UTF8_BOM) :] if prefix.startswith(UTF8_BOM) else prefix
    first = next((byte for byte in body if byte not in _WHITESPACE), None)
    if first is None or first not in _JSON_OPENERS:
        return None
    if any(byte in _JSON_PUNCTUATION for byte in body):
        return "json"
    return None


def looks_binary(prefix: bytes) -> bool:
    """Classify a prefix as binary by NUL bytes or the share of non-text bytes."""
    if not prefix:
        return False
    if 0 in prefix:
        return True
    non_text = sum(1 for byte in prefix if byte not in _TEXT_BYTES)
    return non_text / len(prefix) > BINARY_RATIO_THRESHOLD


__all__ = ["UTF8_BOM", "BINARY_RATIO_THRESHOLD", "detect_json", "looks_binary"]
