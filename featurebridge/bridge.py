"""Load features, step modules and language into one suite tree."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from featurebridge.compiler import locate_features, parse_feature_file
from featurebridge.engine import AnnotationIndex, SuiteNode, SuiteTreeBuilder
from featurebridge.library import Dictionary, StepLibrary, load_step_modules
from featurebridge.localisation import get_language
from featurebridge.types import BridgeConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from featurebridge.types import Feature

logger = logging.getLogger(__name__)


class FeatureBridge:
    """One instance per run: a language, a step library and an annotation index.

    Construction loads the step modules, so a missing module fails here,
    before any tree exists.
    """

    def __init__(self, config: BridgeConfig | None = None, base_dir: str | Path | None = None):
        self.config = config or BridgeConfig()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.language = get_language(self.config.lang)
        self.dictionary = Dictionary()
        self.library = StepLibrary(self.language, self.dictionary)
        self.index = AnnotationIndex()
        self.builder = SuiteTreeBuilder(self.language, self.library, self.index, self.config.timeout)
        load_step_modules(self.config.steps, self.library, self.dictionary, self.base_dir)

    def parse(self, resource: str | Path) -> list[Feature]:
        features: list[Feature] = []
        for path in locate_features(self.base_dir / resource):
            features.extend(parse_feature_file(path, self.language))
        return features

    def build(self, features: list[Feature], root: SuiteNode) -> SuiteNode:
        self.builder.build(features, root)
        logger.info(
            "Built %d feature(s), %d scenario(s), %d step(s) under %r",
            len(features),
            sum(len(f.scenarios) for f in features),
            sum(len(s.steps) for f in features for s in f.scenarios),
            root.name,
        )
        return root

    def load(self, resource: str | Path, register: Callable[[SuiteNode], None] | None = None) -> SuiteNode:
        """Build the complete tree for ``resource`` and hand it to ``register``."""
        features = self.parse(resource)
        root = self.build(features, SuiteNode(str(resource)))
        self.index.freeze()
        if register is not None:
            register(root)
        return root


def load(
    resource: str | Path,
    config: BridgeConfig | None = None,
    base_dir: str | Path | None = None,
) -> SuiteNode:
    return FeatureBridge(config, base_dir).load(resource)
