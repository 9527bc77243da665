"""Shannon entropy calculator."""

from __future__ import annotations

import math
from collections import Counter


def shannon_entropy(s: str) -> float:
    """Compute Shannon entropy (bits per character) of string *s*.

    H = -Σ p(c) · log₂(p(c))  over unique characters c.
    """
    if not s:
        return 0.0
    counts = Counter(s)
    total = len(s)
    return -sum((c / total) * math.log2(c / total) for c in counts.values())
