"""$term substitution for step signatures."""
from __future__ import annotations

import re

TERM_RE = re.compile(r"\$(\w+)")
DEFAULT_TERM_PATTERN = "(.+)"


class Dictionary:
    """Named regex fragments referenced from signatures as ``$name``.

    Undefined terms expand to ``(.+)``.
    """

    def __init__(self):
        self._terms: dict[str, str] = {}

    def define(self, term: str, pattern: str | re.Pattern) -> Dictionary:
        if isinstance(pattern, re.Pattern):
            pattern = pattern.pattern
        if term in self._terms:
            raise ValueError(f"Duplicate dictionary term: ${term}")
        self._terms[term] = pattern
        return self

    def expand(self, signature: str) -> str:
        return TERM_RE.sub(lambda m: self._terms.get(m.group(1), DEFAULT_TERM_PATTERN), signature)

    def __contains__(self, term: str) -> bool:
        return term in self._terms
