"""Content scanner — splits text into lines and drives the line scanner."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional, Sequence

from keyleak.findings.models import Finding
from keyleak.rules.models import CompiledRule
from keyleak.scanner.line import iter_line_findings

IGNORE_MARKER = "keyleak:ignore"

_LINE_BREAK = re.compile(r"\r?\n")


def iter_lines(content: str) -> Iterator[str]:
    """Lazily split *content* on ``\\n`` / ``\\r\\n``.

    A trailing fragment after the last break is always yielded, so
    ``"a\\n"`` gives ``"a"`` then ``""``.
    """
    pos = 0
    for m in _LINE_BREAK.finditer(content):
        yield content[pos:m.start()]
        pos = m.end()
    yield content[pos:]


def is_ignored_line(line: str) -> bool:
    return IGNORE_MARKER in line


def scan_lines(
    lines: Iterable[str],
    rules: Sequence[CompiledRule],
    source: Optional[str] = None,
) -> Iterator[Finding]:
    """Yield findings for an iterable of lines, numbering them from 1."""
    for line_no, line in enumerate(lines, 1):
        if is_ignored_line(line):
            continue
        yield from iter_line_findings(line, rules, line_no=line_no, source=source)


def scan_content(
    content: str,
    rules: Sequence[CompiledRule],
    source: Optional[str] = None,
) -> Iterator[Finding]:
    """Yield findings for *content*, ordered by line then rule then offset.

    Each call starts a fresh generator; nothing is shared between calls.
    """
    return scan_lines(iter_lines(content), rules, source)
