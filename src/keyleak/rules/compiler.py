"""Rule compiler — turns rule records into executable matchers.

Rule files carry ECMA-style pattern sources. Patterns are compiled with
``re.ASCII`` so ``\\d``, ``\\w`` and ``\\b`` stay ASCII-only; ``\\s`` and
``\\S`` are rewritten to the ECMA whitespace set, which is wider than
ASCII whitespace.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from keyleak.rules.models import Active, CompiledRule, Inert, Matcher, Rule

logger = logging.getLogger(__name__)

_ECMA_SPACE = (
    "\\t\\n\\v\\f\\r\\x20\\u00a0\\u1680\\u2000-\\u200a"
    "\\u2028\\u2029\\u202f\\u205f\\u3000\\ufeff"
)


def to_python_pattern(source: str) -> str:
    """Translate the ECMA-only bits of a pattern source into Python syntax.

    * ``(?<name>`` becomes ``(?P<name>``; lookbehinds are left alone.
    * ``\\s`` and ``\\S`` become explicit whitespace classes.

    Escaped characters and character-class contents are never read as
    group syntax.
    """
    out: List[str] = []
    in_class = False
    i, n = 0, len(source)
    while i < n:
        ch = source[i]
        if ch == "\\" and i + 1 < n:
            nxt = source[i + 1]
            if nxt == "s":
                out.append(_ECMA_SPACE if in_class else f"[{_ECMA_SPACE}]")
            elif nxt == "S" and not in_class:
                out.append(f"[^{_ECMA_SPACE}]")
            else:
                out.append(source[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif source.startswith("(?<", i) and source[i + 3:i + 4] not in ("=", "!"):
            out.append("(?P<")
            i += 3
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def compile_matcher(source: str) -> Matcher:
    try:
        return Active(re.compile(to_python_pattern(source), re.ASCII))
    except (re.error, OverflowError, ValueError) as exc:
        return Inert(str(exc))


def compile_rule(rule: Rule) -> CompiledRule:
    matcher = compile_matcher(rule.pattern)
    if isinstance(matcher, Inert):
        logger.debug("Rule %s is inert: %s", rule.id, matcher.reason)
    return CompiledRule(
        rule=rule,
        matcher=matcher,
        lowered_keywords=tuple(k.lower() for k in rule.keywords),
    )


def compile_rules(rules: Sequence[Rule]) -> List[CompiledRule]:
    """Compile every rule, in order, one output per input.

    A pattern that fails to compile never raises; the rule is kept with an
    :class:`Inert` matcher.
    """
    return [compile_rule(r) for r in rules]
