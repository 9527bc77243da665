"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Finding:
    """A single rule match with its location.

    ``matched_text`` is the exact, unredacted match; redaction is an output
    concern. ``start`` / ``end`` are half-open character offsets within the
    line. ``source`` is None for raw buffers (stdin).
    """

    rule_id: str
    rule_name: str
    matched_text: str
    line_no: int
    start: int
    end: int
    source: Optional[str] = None


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[Finding] = field(default_factory=list)
    scanned_files: int = 0
    skipped_files: List[str] = field(default_factory=list)
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)
