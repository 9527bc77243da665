"""Line scanner — applies the compiled rule set to a single line.

Per rule, in rule order:

1. inert rules are skipped;
2. keyword pre-filter: a rule with keywords only runs when one of them
   occurs (case-insensitively) in the line;
3. every non-overlapping match, left to right;
4. entropy gate: a match whose entropy is below the rule threshold is
   dropped;
5. each surviving match becomes a :class:`Finding`.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from keyleak.findings.models import Finding
from keyleak.rules.models import Active, CompiledRule
from keyleak.scanner.entropy import shannon_entropy


def has_keyword(lowered_line: str, rule: CompiledRule) -> bool:
    """True if the rule has no keywords or one of them is in the line."""
    if not rule.lowered_keywords:
        return True
    return any(kw in lowered_line for kw in rule.lowered_keywords)


def iter_line_findings(
    line: str,
    rules: Sequence[CompiledRule],
    *,
    line_no: int = 1,
    source: Optional[str] = None,
) -> Iterator[Finding]:
    lowered = line.lower()
    for rule in rules:
        matcher = rule.matcher
        if not isinstance(matcher, Active):
            continue
        if not has_keyword(lowered, rule):
            continue

        threshold = rule.rule.entropy
        # finditer steps past empty matches, so it cannot stall on the same offset
        for m in matcher.regex.finditer(line):
            text = m.group(0)
            if threshold is not None and shannon_entropy(text) < threshold:
                continue
            yield Finding(
                rule_id=rule.id,
                rule_name=rule.name,
                matched_text=text,
                line_no=line_no,
                start=m.start(),
                end=m.end(),
                source=source,
            )


def scan_line(
    line: str,
    rules: Sequence[CompiledRule],
    *,
    line_no: int = 1,
    source: Optional[str] = None,
) -> List[Finding]:
    """Return the findings for one line (no newline characters)."""
    return list(iter_line_findings(line, rules, line_no=line_no, source=source))
