"""Content sniffing: signatures, containers, and text heuristics."""

from .detectors import SniffResult, TypeDetector, declared_extension, detect_type, is_binary_prefix
from .discovery import DirectoryScanner
from .errors import DetectionError, PrefixReadError
from .prefix import read_prefix

__all__ = [
    "DetectionError",
    "DirectoryScanner",
    "PrefixReadError",
    "SniffResult",
    "TypeDetector",
    "declared_extension",
    "detect_type",
    "is_binary_prefix",
    "read_prefix",
]
