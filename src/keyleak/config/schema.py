"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["text", "json", "csv", "table"]

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "csv", "table")


@dataclass
class ScanConfig:
    rules: Optional[str] = None  # rule file path; None = cwd rules.json or bundled
    disable: List[str] = field(default_factory=list)
    max_size: Optional[str] = None  # "512k", "2m", "1048576"
    include_name: Optional[str] = None
    exclude_name: Optional[str] = None
    ext: List[str] = field(default_factory=list)
    exclude_ext: List[str] = field(default_factory=list)
    exclude_dirs: List[str] = field(default_factory=list)  # added to the built-in set


@dataclass
class OutputConfig:
    format: OutputFormat = "text"
    absolute: bool = False
    fail: bool = False


@dataclass
class KeyleakConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
