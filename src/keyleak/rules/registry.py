"""Rule registry — the ordered, compiled rule set for one run."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from keyleak.rules.compiler import compile_rules
from keyleak.rules.loader import default_rules_path, disable_rules, load_rules
from keyleak.rules.models import CompiledRule


class RuleRegistry:
    """Central, read-only store for the compiled rules of a run.

    Rule order is the order of the rule file and is the order findings are
    reported in for a given line.
    """

    def __init__(self, rules: Iterable[CompiledRule] = (), source: Optional[Path] = None) -> None:
        self._rules: List[CompiledRule] = list(rules)
        self._by_id: Dict[str, CompiledRule] = {r.id: r for r in self._rules}
        self.source = source

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    # ---- queries ----

    @property
    def all_rules(self) -> List[CompiledRule]:
        return list(self._rules)

    def get(self, rule_id: str) -> Optional[CompiledRule]:
        return self._by_id.get(rule_id)

    def active_rules(self) -> List[CompiledRule]:
        return [r for r in self._rules if r.is_active]

    def inert_rules(self) -> List[CompiledRule]:
        return [r for r in self._rules if not r.is_active]


def build_registry(
    rules_path: Optional[Path] = None,
    disable: Iterable[str] = (),
    *,
    cwd: Optional[Path] = None,
) -> RuleRegistry:
    """Load, filter and compile a rule file into a registry.

    Raises :class:`keyleak.config.ConfigError` if the rule file is unusable.
    """
    path = Path(rules_path) if rules_path else default_rules_path(cwd)
    rules = disable_rules(load_rules(path), disable)
    return RuleRegistry(compile_rules(rules), source=path)
