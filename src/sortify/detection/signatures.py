"""Static magic-byte signature tables.

Two disjoint, ordered tables are exported:

* ``FIXED_SIGNATURES`` label a file with a concrete type. Order matters: the
  first signature that matches wins, so more specific patterns come first.
* ``BINARY_SIGNATURES`` mark executables and other formats that must never be
  treated as text. They are scanned independently of the fixed table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Signature:
    """A literal byte pattern expected at an exact offset."""

    pattern: bytes
    offset: int
    label: str

    def matches(self, prefix: bytes) -> bool:
        end = self.offset + len(self.pattern)
        if len(prefix) < end:
            return False
        return prefix[self.offset : end] == self.pattern


FIXED_SIGNATURES: tuple[Signature, ...] = (
    Signature(b"\x89PNG\r\n\x1a\n", 0, "png"),
    Signature(b"\xff\xd8\xff", 0, "jpg"),
    Signature(b"GIF87a", 0, "gif"),
    Signature(b"GIF89a", 0, "gif"),
    Signature(b"BM", 0, "bmp"),
    Signature(b"%PDF", 0, "pdf"),
    Signature(b"%!PS-Adobe-", 0, "ps"),
    Signature(b"PK\x03\x04", 0, "zip"),
    Signature(b"\x1f\x8b\x08", 0, "gz"),
    Signature(b"\x1a\x45\xdf\xa3", 0, "mkv"),
    Signature(b"WEBP", 8, "webp"),
    Signature(b"ID3", 0, "mp3"),
    Signature(b"OggS", 0, "ogg"),
    Signature(b"fLaC", 0, "flac"),
    Signature(b"\x00\x00\x01\x00", 0, "ico"),
    Signature(b"II*\x00", 0, "tif"),
    Signature(b"MM\x00*", 0, "tif"),
    Signature(b"Rar!\x1a\x07\x00", 0, "rar"),
    Signature(b"7z\xbc\xaf\x27\x1c", 0, "7z"),
)

BINARY_SIGNATURES: tuple[Signature, ...] = (
    Signature(b"MZ", 0, "exe"),
    Signature(b"\x7fELF", 0, "elf"),
    # Mach-O: fat binary, then 64/32-bit in both byte orders.
    Signature(b"\xca\xfe\xba\xbe", 0, "mach-o"),
    Signature(b"\xcf\xfa\xed\xfe", 0, "mach-o"),
    Signature(b"\xfe\xed\xfa\xcf", 0, "mach-o"),
    Signature(b"\xfe\xed\xfa\xce", 0, "mach-o"),
    Signature(b"\x00asm", 0, "wasm"),
)

# Every label in the fixed table names a binary container or media format.
BINARY_FORMATS = frozenset(signature.label for signature in FIXED_SIGNATURES)


def _first_match(table: tuple[Signature, ...], prefix: bytes) -> Optional[Signature]:
    for signature in table:
        if signature.matches(prefix):
            return signature
    return None


def match_fixed(prefix: bytes) -> Optional[str]:
    """Return the label of the first fixed signature present in ``prefix``."""
    signature = _first_match(FIXED_SIGNATURES, prefix)
    return signature.label if signature else None


def match_binary_indicator(prefix: bytes) -> bool:
    """Return True when ``prefix`` starts like an executable or bytecode module."""
    return _first_match(BINARY_SIGNATURES, prefix) is not None


def binary_indicator_label(prefix: bytes) -> Optional[str]:
    """Return the label of the binary-indicating signature in ``prefix``, if any."""
    signature = _first_match(BINARY_SIGNATURES, prefix)
    return signature.label if signature else None


__all__ = [
    "Signature",
    "FIXED_SIGNATURES",
    "BINARY_SIGNATURES",
    "BINARY_FORMATS",
    "match_fixed",
    "match_binary_indicator",
    "binary_indicator_label",
]
