"""Turn parsed features into feature / scenario suites and step tests."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from featurebridge.engine.adapter import execute_step
from featurebridge.engine.annotations import resolve_skip_reason
from featurebridge.engine.context import StepContext
from featurebridge.engine.nodes import SuiteNode, TestNode
from featurebridge.types import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterable

    from featurebridge.engine.annotations import AnnotationIndex
    from featurebridge.library.steps import StepLibrary
    from featurebridge.localisation import Language
    from featurebridge.types import Feature, Scenario

logger = logging.getLogger(__name__)


class SuiteTreeBuilder:
    def __init__(
        self,
        language: Language,
        library: StepLibrary,
        index: AnnotationIndex,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.language = language
        self.library = library
        self.index = index
        self.timeout = timeout

    def build(self, features: Iterable[Feature], root: SuiteNode) -> None:
        for feature in features:
            self._feature_suite(root, feature)

    def _feature_suite(self, parent: SuiteNode, feature: Feature) -> SuiteNode:
        suite = parent.add(SuiteNode(feature.title, parent))
        self.index.register_feature(self.language, suite, feature.annotations)
        for scenario in feature.scenarios:
            self._scenario_suite(suite, scenario)
        logger.debug("Built feature suite %r (%d scenarios)", feature.title, len(feature.scenarios))
        return suite

    def _scenario_suite(self, parent: SuiteNode, scenario: Scenario) -> SuiteNode:
        suite = parent.add(SuiteNode(scenario.title, parent, context={}))
        self.index.register_scenario(self.language, suite, scenario.annotations)
        for step in scenario.steps:
            self._step_test(suite, step)
        return suite

    def _step_test(self, parent: SuiteNode, step: str) -> TestNode:
        index = self.index
        library = self.library

        def body(test: TestNode) -> asyncio.Future | None:
            reason = resolve_skip_reason(index, test.parent)
            if reason:
                test.skip(reason)
            context = StepContext(test)
            if context.skipped is not None:
                return None
            test.state = "running"
            return execute_step(library, step, context)

        return parent.add(TestNode(step, parent, body=body, timeout=self.timeout))
