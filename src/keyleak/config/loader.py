"""Load and merge configuration from .keyleak.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from keyleak.config.schema import OUTPUT_FORMATS, KeyleakConfig, OutputConfig, ScanConfig

CONFIG_FILENAME = ".keyleak.toml"


class ConfigError(Exception):
    """Raised when configuration (config file, rule file, filters) is unusable."""


def find_config_file(cwd: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = cwd / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _merge_env_overrides(cfg: KeyleakConfig) -> None:
    """Apply KEYLEAK_* environment variable overrides."""
    if val := os.environ.get("KEYLEAK_RULES"):
        cfg.scan.rules = val
    if val := os.environ.get("KEYLEAK_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("KEYLEAK_DISABLE_RULES"):
        cfg.scan.disable.extend(_split_list(val))
    if val := os.environ.get("KEYLEAK_EXCLUDE_DIRS"):
        cfg.scan.exclude_dirs.extend(_split_list(val))
    if val := os.environ.get("KEYLEAK_FAIL"):
        if val.lower() in ("1", "true", "yes"):
            cfg.output.fail = True


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    if "max_size" in filtered and isinstance(filtered["max_size"], int):
        filtered["max_size"] = str(filtered["max_size"])
    return cls(**filtered)


def load_config(
    cwd: Path,
    config_override: Optional[str] = None,
) -> KeyleakConfig:
    """Load, validate, and return a KeyleakConfig."""
    config_path = find_config_file(cwd, config_override)

    if config_path is None:
        cfg = KeyleakConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = KeyleakConfig(
            version=raw.get("version", "1.0"),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format in {config_path}: {cfg.output.format}")

    _merge_env_overrides(cfg)
    return cfg
