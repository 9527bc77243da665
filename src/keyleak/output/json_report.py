"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from keyleak.findings.models import Finding
from keyleak.findings.redactor import display_path, redact


def to_dict(
    findings: Sequence[Finding],
    *,
    cwd: Optional[Path] = None,
    absolute: bool = False,
) -> Dict[str, Any]:
    """Convert findings to a JSON-serialisable dict (match values redacted)."""
    findings_list: List[Dict[str, Any]] = []
    for f in findings:
        findings_list.append({
            "ruleId": f.rule_id,
            "ruleName": f.rule_name,
            "match": redact(f.matched_text),
            "file": display_path(f, cwd=cwd, absolute=absolute),
            "line": f.line_no,
            "start": f.start,
            "end": f.end,
        })

    return {
        "count": len(findings_list),
        "findings": findings_list,
    }


def render(findings: Sequence[Finding], *, cwd: Optional[Path] = None, absolute: bool = False) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(findings, cwd=cwd, absolute=absolute), indent=2)
