"""pytest host: collect ``.feature`` files as feature / scenario / step items.

One FeatureBridge per session, so only / pending marks apply across every
collected file. Settings come from ``featurebridge.yaml`` in the rootdir
(ini option ``featurebridge_config``).
"""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import pytest

from featurebridge.bridge import FeatureBridge
from featurebridge.config import CONFIG_FILENAME, read_config
from featurebridge.engine.nodes import SuiteNode
from featurebridge.errors import AmbiguousStepError, StepTimeoutError, UndefinedStepError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from featurebridge.engine.nodes import TestNode

logger = logging.getLogger(__name__)

bridge_key = pytest.StashKey[FeatureBridge]()
loop_key = pytest.StashKey[asyncio.AbstractEventLoop]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "featurebridge_config",
        help="featurebridge settings file, relative to the rootdir",
        default=CONFIG_FILENAME,
    )


def pytest_collect_file(file_path: Path, parent: pytest.Collector) -> FeatureFile | None:
    if file_path.suffix == ".feature":
        return FeatureFile.from_parent(parent, path=file_path)
    return None


def pytest_collection_finish(session: pytest.Session) -> None:
    bridge = session.config.stash.get(bridge_key, None)
    if bridge is not None:
        bridge.index.freeze()


def pytest_unconfigure(config: pytest.Config) -> None:
    loop = config.stash.get(loop_key, None)
    if loop is not None:
        loop.close()
        del config.stash[loop_key]


def get_bridge(config: pytest.Config) -> FeatureBridge:
    bridge = config.stash.get(bridge_key, None)
    if bridge is None:
        settings = read_config(config.rootpath / config.getini("featurebridge_config"))
        logger.debug("featurebridge settings: %s", settings)
        bridge = FeatureBridge(settings, base_dir=config.rootpath)
        config.stash[bridge_key] = bridge
    return bridge


def _event_loop(config: pytest.Config) -> asyncio.AbstractEventLoop:
    loop = config.stash.get(loop_key, None)
    if loop is None:
        loop = asyncio.new_event_loop()
        config.stash[loop_key] = loop
    return loop


class FeatureFile(pytest.File):
    def collect(self) -> Iterator[SuiteCollector]:
        bridge = get_bridge(self.config)
        # the tree must outlive collection: children hold weak parent refs
        self.suite = bridge.build(bridge.parse(self.path), SuiteNode(self.path.name))
        for feature in self.suite.children:
            yield SuiteCollector.from_parent(self, name=feature.name, suite=feature)


class SuiteCollector(pytest.Collector):
    def __init__(self, *, suite: SuiteNode, **kwargs: Any):
        super().__init__(**kwargs)
        self.suite = suite

    def collect(self) -> Iterator[SuiteCollector | StepItem]:
        for child in self.suite.children:
            if isinstance(child, SuiteNode):
                yield SuiteCollector.from_parent(self, name=child.name, suite=child)
            else:
                yield StepItem.from_parent(self, name=child.name, test=child)


class StepItem(pytest.Item):
    def __init__(self, *, test: TestNode, **kwargs: Any):
        super().__init__(**kwargs)
        self.test = test

    def runtest(self) -> None:
        _event_loop(self.config).run_until_complete(self.test.run())
        if self.test.state == "skipped":
            pytest.skip(self.test.skipped or "skipped")
        if self.test.state == "failed":
            raise self.test.error

    def repr_failure(self, excinfo: pytest.ExceptionInfo[BaseException], style=None) -> str:
        if isinstance(excinfo.value, (UndefinedStepError, AmbiguousStepError, StepTimeoutError)):
            return str(excinfo.value)
        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple[Path, int | None, str]:
        return self.path, None, f"step: {self.test.full_name}"
