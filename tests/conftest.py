"""Shared fixtures for featurebridge tests."""
from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

from featurebridge.bridge import FeatureBridge
from featurebridge.engine import Runner
from featurebridge.localisation import get_language
from featurebridge.types import BridgeConfig

if TYPE_CHECKING:
    from pathlib import Path

    from featurebridge.engine import RunSummary, SuiteNode, TestNode

pytest_plugins = ["pytester"]


class BridgeHarness:
    """Temp project with feature files and step modules.

    Write features and steps, then ``load()`` and ``run()``; outcomes are
    looked up by step or scenario name.
    """

    def __init__(self, root: Path, *, lang: str = "default", timeout: float = 30.0):
        self.root = root
        self.lang = lang
        self.timeout = timeout
        self.steps_modules: list[str] = []
        self.bridge: FeatureBridge | None = None
        self.tree: SuiteNode | None = None
        (root / "features").mkdir()

    def feature(self, name: str, text: str) -> Path:
        path = self.root / "features" / f"{name}.feature"
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    def steps(self, code: str, name: str = "steps.py") -> Path:
        path = self.root / name
        path.write_text(textwrap.dedent(code).lstrip(), encoding="utf-8")
        self.steps_modules.append(name)
        return path

    def load(self, resource: str = "features") -> SuiteNode:
        config = BridgeConfig(lang=self.lang, steps=self.steps_modules or ["steps"], timeout=self.timeout)
        self.bridge = FeatureBridge(config, base_dir=self.root)
        self.tree = self.bridge.load(resource)
        return self.tree

    def run(self, grep: str | None = None) -> RunSummary:
        if self.tree is None:
            self.load()
        return Runner(self.tree, grep=grep).run()

    def tests_of(self, scenario_title: str) -> list[TestNode]:
        return [t for t in self.tree.walk_tests() if t.parent.name == scenario_title]

    def states_of(self, scenario_title: str) -> set[str]:
        return {t.state for t in self.tests_of(scenario_title)}

    def reasons_of(self, scenario_title: str) -> set[str | None]:
        return {t.skipped for t in self.tests_of(scenario_title)}


@pytest.fixture
def harness(tmp_path: Path) -> BridgeHarness:
    return BridgeHarness(tmp_path)


@pytest.fixture
def english():
    return get_language("default")
