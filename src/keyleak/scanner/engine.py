"""Core scan engine — orchestrates selection, reading and scanning.

Files are processed one at a time; per-file failures (unreadable, vanished,
binary) are absorbed and logged at DEBUG, never raised.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from keyleak.findings.models import Finding, ScanResult
from keyleak.rules.models import CompiledRule
from keyleak.scanner.content import scan_content
from keyleak.scanner.selector import FileSelector

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when the scan target itself cannot be used."""


class UnreadableFile(Exception):
    """A candidate file that cannot be scanned as text."""


def read_text(path: Path) -> str:
    """Read *path* as UTF-8 text, keeping ``\\r\\n`` intact.

    Raises UnreadableFile for I/O errors, undecodable or binary content.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as exc:
        raise UnreadableFile(f"not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise UnreadableFile(str(exc)) from exc
    if "\x00" in content:
        raise UnreadableFile("binary content")
    return content


def iter_candidates(target: Path, selector: FileSelector) -> Iterator[Tuple[Path, Optional[str]]]:
    """Yield ``(path, content)`` per candidate; content is None if unreadable."""
    for path in selector.select(target):
        logger.debug("Scanning %s", path)
        try:
            yield path, read_text(path)
        except UnreadableFile as exc:
            logger.debug("Skipping %s: %s", path, exc)
            yield path, None


def scan_text(content: str, rules: Sequence[CompiledRule]) -> Iterator[Finding]:
    """Scan a raw buffer (stdin); findings carry no source."""
    return scan_content(content, rules)


def scan_path(
    target: Path,
    rules: Sequence[CompiledRule],
    selector: Optional[FileSelector] = None,
) -> Iterator[Finding]:
    """Lazily yield findings for a file or directory tree, file by file."""
    selector = selector or FileSelector()
    for path, content in iter_candidates(Path(target), selector):
        if content is not None:
            yield from scan_content(content, rules, str(path))


def scan(
    target: Optional[Path],
    rules: Sequence[CompiledRule],
    selector: Optional[FileSelector] = None,
    *,
    content: Optional[str] = None,
    on_file: Optional[Callable[[Path], None]] = None,
) -> ScanResult:
    """Run a full scan and collect the result.

    Pass *content* (and ``target=None``) to scan a raw buffer; otherwise
    *target* must be an existing file or directory.
    """
    start = time.perf_counter()
    findings: List[Finding] = []
    skipped: List[str] = []
    scanned = 0

    if content is not None:
        findings.extend(scan_text(content, rules))
    else:
        if target is None:
            raise ScanError("Nothing to scan: give a path or a content buffer")
        target = Path(target).resolve()
        if not target.exists():
            raise ScanError(f"cannot access '{target}'")

        for path, text in iter_candidates(target, selector or FileSelector()):
            if on_file is not None:
                on_file(path)
            if text is None:
                skipped.append(str(path))
                continue
            scanned += 1
            findings.extend(scan_content(text, rules, str(path)))

    elapsed = (time.perf_counter() - start) * 1000
    return ScanResult(
        findings=findings,
        scanned_files=scanned,
        skipped_files=skipped,
        scan_duration_ms=round(elapsed, 2),
    )
