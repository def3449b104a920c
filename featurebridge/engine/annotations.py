"""only / pending bookkeeping and skip resolution."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from featurebridge.errors import IndexFrozenError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from featurebridge.engine.nodes import SuiteNode
    from featurebridge.localisation import Language

ONLY = "only"
PENDING = "pending"


def has_annotation(language: Language, annotations: Mapping[str, Any], name: str) -> bool:
    """True if some annotation key is the localised ``name`` (whole key, any case)."""
    pattern = re.compile(f"(?:{language.localise(name)})", re.IGNORECASE)
    return any(pattern.fullmatch(key) for key in annotations)


class AnnotationIndex:
    """Feature and scenario suites marked only / pending.

    Membership is by node identity. Written while the tree is built, read-only
    once ``freeze()`` has been called.
    """

    def __init__(self):
        self.only_features: set[SuiteNode] = set()
        self.only_scenarios: set[SuiteNode] = set()
        self.pending_features: set[SuiteNode] = set()
        self.pending_scenarios: set[SuiteNode] = set()
        self.frozen = False

    def register_feature(self, language: Language, suite: SuiteNode, annotations: Mapping[str, Any]) -> None:
        self._register(language, suite, annotations, self.only_features, self.pending_features)

    def register_scenario(self, language: Language, suite: SuiteNode, annotations: Mapping[str, Any]) -> None:
        self._register(language, suite, annotations, self.only_scenarios, self.pending_scenarios)

    def freeze(self) -> None:
        self.frozen = True

    def _register(self, language, suite, annotations, only: set, pending: set) -> None:
        if self.frozen:
            raise IndexFrozenError(f'Annotation index is frozen; cannot register "{suite.name}"')
        if has_annotation(language, annotations, ONLY):
            only.add(suite)
        if has_annotation(language, annotations, PENDING):
            pending.add(suite)


def resolve_skip_reason(index: AnnotationIndex, scenario: SuiteNode) -> str | None:
    """Why a step of ``scenario`` should be skipped, or None.

    Feature-level marks win over scenario-level ones, and any ``only`` mark
    turns every unmarked node at that level into a skip.
    """
    feature = scenario.parent
    if index.only_features and feature not in index.only_features:
        return ONLY
    if feature in index.pending_features:
        return PENDING
    if index.only_scenarios and scenario not in index.only_scenarios:
        return ONLY
    if scenario in index.pending_scenarios:
        return PENDING
    return None
