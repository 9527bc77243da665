"""File selection — which paths reach the content scanner.

Directory traversal is depth-first with entries sorted by name, so the
candidate order is stable for a given tree. Hidden entries (leading ``.``)
and entries whose base name is in the exclusion set are pruned wherever
they appear. Symlinks are not followed.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional

from keyleak.config.defaults import DEFAULT_EXCLUDE_DIRS
from keyleak.config.loader import ConfigError

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."

BINARY_EXTENSIONS: tuple[str, ...] = (
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bmp", ".webp",
    ".pdf", ".zip", ".tar", ".gz", ".mp3", ".mp4", ".woff", ".woff2",
    ".ttf", ".eot", ".exe", ".dll", ".so", ".dylib", ".bin",
)

_SIZE_RE = re.compile(r"^(\d+)(k|m)?$")


def parse_size(value: str) -> int:
    """Parse ``"512"``, ``"64k"`` or ``"2m"`` into bytes."""
    m = _SIZE_RE.match(value.strip().lower())
    if m is None:
        raise ConfigError(f"Invalid size: {value!r} (expected <n>, <n>k or <n>m)")
    n = int(m.group(1))
    if m.group(2) == "k":
        return n * 1024
    if m.group(2) == "m":
        return n * 1024 * 1024
    return n


def normalize_extensions(values: Iterable[str]) -> FrozenSet[str]:
    """Lowercase extensions and make sure each has a leading dot."""
    out = set()
    for v in values:
        v = v.strip().lower()
        if not v:
            continue
        out.add(v if v.startswith(".") else f".{v}")
    return frozenset(out)


def _compile_name_pattern(pattern: Optional[str], option: str) -> Optional[re.Pattern[str]]:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid {option} pattern {pattern!r}: {exc}") from exc


def build_exclusions(extra: Iterable[str] = (), *, defaults: Iterable[str] = DEFAULT_EXCLUDE_DIRS) -> FrozenSet[str]:
    """Union of the default directory names and user-supplied ones."""
    return frozenset(defaults) | frozenset(n.strip() for n in extra if n.strip())


def is_binary_name(path: str) -> bool:
    lower = path.lower()
    return lower.endswith(BINARY_EXTENSIONS)


@dataclass(frozen=True)
class FileFilters:
    """Per-file predicates; a file must pass every configured one."""

    max_size_bytes: Optional[int] = None
    include_name: Optional[re.Pattern[str]] = None
    exclude_name: Optional[re.Pattern[str]] = None
    include_extensions: FrozenSet[str] = frozenset()
    exclude_extensions: FrozenSet[str] = frozenset()

    @classmethod
    def build(
        cls,
        *,
        max_size: Optional[str] = None,
        include_name: Optional[str] = None,
        exclude_name: Optional[str] = None,
        ext: Iterable[str] = (),
        exclude_ext: Iterable[str] = (),
    ) -> "FileFilters":
        """Build filters from raw option values. Raises ConfigError."""
        size = parse_size(max_size) if max_size else None
        return cls(
            max_size_bytes=size or None,
            include_name=_compile_name_pattern(include_name, "include-name"),
            exclude_name=_compile_name_pattern(exclude_name, "exclude-name"),
            include_extensions=normalize_extensions(ext),
            exclude_extensions=normalize_extensions(exclude_ext),
        )

    def accepts(self, path: Path) -> bool:
        """Return True if *path* passes every configured filter."""
        if self.max_size_bytes is not None:
            try:
                if path.stat().st_size > self.max_size_bytes:
                    return False
            except OSError:
                return False

        name = path.name
        if self.include_name is not None and not self.include_name.search(name):
            return False
        if self.exclude_name is not None and self.exclude_name.search(name):
            return False

        # suffix test on the whole path so multi-part extensions (".min.js") work
        lower = str(path).lower()
        if self.include_extensions and not lower.endswith(tuple(self.include_extensions)):
            return False
        if self.exclude_extensions and lower.endswith(tuple(self.exclude_extensions)):
            return False
        return True


class FileSelector:
    """Enumerate scan candidates for a file or a directory tree."""

    def __init__(
        self,
        filters: Optional[FileFilters] = None,
        exclusions: Optional[FrozenSet[str]] = None,
    ) -> None:
        self.filters = filters or FileFilters()
        self.exclusions = exclusions if exclusions is not None else build_exclusions()

    def is_pruned(self, name: str) -> bool:
        """True for hidden names and names in the exclusion set."""
        return name.startswith(HIDDEN_PREFIX) or name in self.exclusions

    def select(self, target: Path) -> Iterator[Path]:
        """Yield candidate files for *target* (a file or a directory)."""
        target = Path(target)
        if target.is_dir():
            yield from self.walk(target)
        elif target.is_file():
            if self.filters.accepts(target):
                yield target
            else:
                logger.debug("Filtered out: %s", target)

    def walk(self, directory: Path) -> Iterator[Path]:
        """Depth-first walk; an unlistable directory skips only its subtree.

        Uses an explicit stack of per-directory iterators, so tree depth is
        not bounded by the interpreter recursion limit.
        """
        stack = [_list_dir(directory)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            if self.is_pruned(entry.name):
                continue
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as exc:
                logger.debug("Cannot stat %s: %s", path, exc)
                continue

            if is_dir:
                stack.append(_list_dir(path))
            elif is_file:
                if is_binary_name(entry.name):
                    continue
                if self.filters.accepts(path):
                    yield path
                else:
                    logger.debug("Filtered out: %s", path)


def _list_dir(directory: Path) -> Iterator[os.DirEntry]:
    """Name-sorted entries of *directory*; empty if it cannot be listed."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.debug("Cannot list directory %s: %s", directory, exc)
        return iter(())
    return iter(entries)
