"""Detectors for container formats whose subtype lives past the outer magic."""

from __future__ import annotations

from typing import Optional

_ISO_BMFF_BRANDS: tuple[tuple[bytes, str], ...] = (
    (b"isom", "mp4"),
    (b"iso2", "mp4"),
    (b"mp41", "mp4"),
    (b"mp42", "mp4"),
    (b"avc1", "mp4"),
    (b"MSNV", "mp4"),
    (b"mp71", "mp4"),
    (b"M4V ", "m4v"),
    (b"M4A ", "m4a"),
    (b"M4B ", "m4b"),
    (b"qt  ", "mov"),
)

_RIFF_FORMS: tuple[tuple[bytes, str], ...] = (
    (b"WEBP", "webp"),
    (b"WAVE", "wav"),
    (b"AVI ", "avi"),
)

# Checked in order; the first marker found in the sampled bytes decides.
_ZIP_MARKERS: tuple[tuple[tuple[bytes, ...], str], ...] = (
    ((b"[Content_Types].xml", b"word/"), "docx"),
    ((b"xl/",), "xlsx"),
    ((b"ppt/",), "pptx"),
    ((b"AndroidManifest.xml",), "apk"),
    ((b"META-INF/",), "jar"),
)

ZIP_LOCAL_HEADER = b"PK\x03\x04"


def detect_iso_bmff(prefix: bytes) -> Optional[str]:
    """Classify an ISO base media file by its ``ftyp`` major brand.

    Unrecognised brands still report ``mp4`` once the ``ftyp`` box is present.
    """
    if len(prefix) < 12 or prefix[4:8] != b"ftyp":
        return None
    brand = prefix[8:12]
    for known, label in _ISO_BMFF_BRANDS:
        if brand == known:
            return label
    return "mp4"


def detect_riff(prefix: bytes) -> Optional[str]:
    """Classify a RIFF file by its form type; unknown forms are not matched."""
    if len(prefix) < 12 or not prefix.startswith(b"RIFF"):
        return None
    form = prefix[8:12]
    for known, label in _RIFF_FORMS:
        if form == known:
            return label
    return None


def detect_zip(prefix: bytes) -> Optional[str]:
    """Guess the ZIP-based format from entry names visible in the sample.

    Only the sampled bytes are searched, so a subtype is reported only when the
    first entry name happens to fall inside the prefix.
    """
    if not prefix.startswith(ZIP_LOCAL_HEADER):
        return None
    for markers, label in _ZIP_MARKERS:
        if any(marker in prefix for marker in markers):
            return label
    return "zip"


def detect_container(prefix: bytes) -> Optional[str]:
    """Run the container detectors in priority order."""
    for detector in (detect_iso_bmff, detect_riff, detect_zip):
        label = detector(prefix)
        if label is not None:
            return label
    return None


__all__ = [
    "ZIP_LOCAL_HEADER",
    "detect_iso_bmff",
    "detect_riff",
    "detect_zip",
    "detect_container",
]
