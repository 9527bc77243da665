"""CSV reporter."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Optional, Sequence

from keyleak.findings.models import Finding
from keyleak.findings.redactor import display_path, redact

HEADER = ("ruleId", "ruleName", "match", "file", "line", "start", "end")


def render(findings: Sequence[Finding], *, cwd: Optional[Path] = None, absolute: bool = False) -> str:
    """Return CSV text with a header row and one row per finding."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADER)
    for f in findings:
        writer.writerow([
            f.rule_id,
            f.rule_name,
            redact(f.matched_text),
            display_path(f, cwd=cwd, absolute=absolute),
            f.line_no,
            f.start,
            f.end,
        ])
    return buf.getvalue().rstrip("\n")
