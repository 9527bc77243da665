"""Rule file loading — JSON or YAML arrays of rule records.

Every record is validated here so nothing loosely typed reaches the
compiler::

    [{"id": "aws", "name": "AWS Access Key", "regex": "AKIA[0-9A-Z]{16}",
      "keywords": ["aws", "akia"], "entropy": 3.0}]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional

import yaml

from keyleak.config.loader import ConfigError
from keyleak.rules.models import Rule

RULES_FILENAME = "rules.json"
BUNDLED_RULES = Path(__file__).with_name(RULES_FILENAME)


def default_rules_path(cwd: Optional[Path] = None) -> Path:
    """``<cwd>/rules.json`` if present, otherwise the bundled rule file."""
    cwd = cwd or Path.cwd()
    candidate = cwd / RULES_FILENAME
    return candidate if candidate.is_file() else BUNDLED_RULES


def _parse(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read rule file {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _require_str(entry: dict, key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Rule #{index}: '{key}' must be a non-empty string")
    return value


def rule_from_dict(entry: Any, index: int = 0) -> Rule:
    """Validate one raw record and turn it into a :class:`Rule`."""
    if not isinstance(entry, dict):
        raise ConfigError(f"Rule #{index}: expected an object, got {type(entry).__name__}")

    rule_id = _require_str(entry, "id", index)
    name = _require_str(entry, "name", index)
    pattern = _require_str(entry, "regex", index)

    keywords = entry.get("keywords")
    if keywords is None:
        keywords = []
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        raise ConfigError(f"Rule '{rule_id}': 'keywords' must be a list of strings")

    entropy = entry.get("entropy")
    if entropy is not None:
        # bool is an int subclass; reject it explicitly
        if isinstance(entropy, bool) or not isinstance(entropy, (int, float)):
            raise ConfigError(f"Rule '{rule_id}': 'entropy' must be a number")
        entropy = float(entropy)

    return Rule(
        id=rule_id,
        name=name,
        pattern=pattern,
        keywords=tuple(keywords),
        entropy=entropy,
    )


def load_rules(path: Path) -> List[Rule]:
    """Load and validate a rule file. Raises ConfigError on any problem."""
    data = _parse(Path(path))
    if not isinstance(data, list):
        raise ConfigError(f"{path}: rule file must be an array of rules")

    rules: List[Rule] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        rule = rule_from_dict(entry, index)
        if rule.id in seen:
            raise ConfigError(f"{path}: duplicate rule id '{rule.id}'")
        seen.add(rule.id)
        rules.append(rule)
    return rules


def disable_rules(rules: Iterable[Rule], disabled: Iterable[str]) -> List[Rule]:
    """Drop rules whose id is in *disabled*, keeping the original order."""
    drop = set(disabled)
    return [r for r in rules if r.id not in drop]
