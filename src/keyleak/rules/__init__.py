"""Rule engine — models, loading, compilation, registry."""

from keyleak.rules.compiler import compile_rules
from keyleak.rules.loader import default_rules_path, disable_rules, load_rules
from keyleak.rules.models import Active, CompiledRule, Inert, Rule
from keyleak.rules.registry import RuleRegistry, build_registry

__all__ = [
    "Active",
    "CompiledRule",
    "Inert",
    "Rule",
    "RuleRegistry",
    "build_registry",
    "compile_rules",
    "default_rules_path",
    "disable_rules",
    "load_rules",
]
