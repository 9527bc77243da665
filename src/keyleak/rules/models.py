"""Rule data model — raw rule records and their compiled form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Rule:
    """A single detection rule as declared in the rule file.

    ``pattern`` is kept as the raw source string; it is compiled once by
    :func:`keyleak.rules.compiler.compile_rules`, never inside the scan loop.
    """

    id: str
    name: str
    pattern: str
    keywords: Tuple[str, ...] = ()
    entropy: Optional[float] = None


@dataclass(frozen=True)
class Active:
    """A successfully compiled matcher."""

    regex: re.Pattern[str]


@dataclass(frozen=True)
class Inert:
    """Marker for a rule whose pattern failed to compile."""

    reason: str


Matcher = Union[Active, Inert]


@dataclass(frozen=True)
class CompiledRule:
    """A rule plus its matcher.

    Inert rules stay in the rule set so they can be reported, but never
    produce findings.
    """

    rule: Rule
    matcher: Matcher
    # keywords lowered once for the per-line pre-filter
    lowered_keywords: Tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.rule.id

    @property
    def name(self) -> str:
        return self.rule.name

    @property
    def is_active(self) -> bool:
        return isinstance(self.matcher, Active)
