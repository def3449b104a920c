from featurebridge.engine.annotations import AnnotationIndex, has_annotation, resolve_skip_reason
from featurebridge.engine.builder import SuiteTreeBuilder
from featurebridge.engine.context import Deferred, StepContext
from featurebridge.engine.nodes import SuiteNode, TestNode
from featurebridge.engine.runner import Runner, RunSummary

__all__ = [
    "AnnotationIndex",
    "Deferred",
    "RunSummary",
    "Runner",
    "StepContext",
    "SuiteNode",
    "SuiteTreeBuilder",
    "TestNode",
    "has_annotation",
    "resolve_skip_reason",
]
