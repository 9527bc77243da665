"""Scanner — entropy, line and content scanning, file selection, engine."""

from keyleak.scanner.content import IGNORE_MARKER, iter_lines, scan_content, scan_lines
from keyleak.scanner.engine import ScanError, scan, scan_path, scan_text
from keyleak.scanner.entropy import shannon_entropy
from keyleak.scanner.line import scan_line
from keyleak.scanner.selector import FileFilters, FileSelector, build_exclusions

__all__ = [
    "FileFilters",
    "FileSelector",
    "IGNORE_MARKER",
    "ScanError",
    "build_exclusions",
    "iter_lines",
    "scan",
    "scan_content",
    "scan_line",
    "scan_lines",
    "scan_path",
    "scan_text",
    "shannon_entropy",
]
