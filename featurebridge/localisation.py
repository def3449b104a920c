"""Language table: gherkin dialect plus the annotation vocabulary.

Annotation keywords are regex fragments, matched case-insensitively against
the whole annotation name.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from gherkin.dialect import Dialect

from featurebridge.errors import LocaleError


@dataclass(frozen=True)
class Language:
    name: str
    dialect: str
    vocabulary: dict[str, str] = field(default_factory=dict)

    def localise(self, term: str) -> str:
        try:
            return self.vocabulary[term]
        except KeyError:
            raise LocaleError(f'Language "{self.name}" has no keyword for "{term}"') from None

    def keywords(self) -> Dialect:
        dialect = Dialect.for_name(self.dialect)
        if dialect is None:
            raise LocaleError(f'Unknown gherkin dialect "{self.dialect}" for language "{self.name}"')
        return dialect

    def step_prefix(self, kind: str) -> str:
        """Regex alternation of the step keywords accepted by given/when/then."""
        dialect = self.keywords()
        try:
            primary = {
                "given": dialect.given_keywords,
                "when": dialect.when_keywords,
                "then": dialect.then_keywords,
            }[kind]
        except KeyError:
            raise LocaleError(f"Unknown step kind: {kind}") from None
        words = {*primary, *dialect.and_keywords, *dialect.but_keywords}
        ordered = sorted(words, key=lambda w: (-len(w), w))
        return "(?:" + "|".join(re.escape(w) for w in ordered) + ")"


# Annotation keywords may not contain spaces: they are written as gherkin tags.
_ENGLISH = {"only": "only", "pending": "pending"}

LANGUAGES: dict[str, Language] = {
    "default": Language("default", "en", _ENGLISH),
    "English": Language("English", "en", _ENGLISH),
    "French": Language("French", "fr", {"only": "seulement|only", "pending": "en[-_]attente|pending"}),
    "German": Language("German", "de", {"only": "nur|only", "pending": "ausstehend|pending"}),
    "Spanish": Language("Spanish", "es", {"only": "solo|only", "pending": "pendiente|pending"}),
    "Chinese": Language("Chinese", "zh-CN", {"only": "仅|only", "pending": "待定|pending"}),
}


def get_language(name: str) -> Language:
    language = LANGUAGES.get(name)
    if language is None:
        folded = name.casefold()
        language = next((lang for key, lang in LANGUAGES.items() if key.casefold() == folded), None)
    if language is None:
        raise LocaleError(f"Unknown language: {name}. Available: {', '.join(LANGUAGES)}")
    return language
