"""Plain text reporter — one ``file:line: rule: match`` line per finding."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from keyleak.findings.models import Finding
from keyleak.findings.redactor import display_path, redact


def format_finding(f: Finding, *, cwd: Optional[Path] = None, absolute: bool = False) -> str:
    return f"{display_path(f, cwd=cwd, absolute=absolute)}:{f.line_no}: {f.rule_id}: {redact(f.matched_text)}"


def render(findings: Sequence[Finding], *, cwd: Optional[Path] = None, absolute: bool = False) -> str:
    return "\n".join(format_finding(f, cwd=cwd, absolute=absolute) for f in findings)
