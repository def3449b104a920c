"""featurebridge: run gherkin feature files as suites of step tests."""
from featurebridge.bridge import FeatureBridge, load
from featurebridge.config import load_config, read_config
from featurebridge.engine import Deferred, Runner, RunSummary, StepContext, SuiteNode, TestNode
from featurebridge.errors import (
    AmbiguousStepError,
    ConfigError,
    FeatureBridgeError,
    LocaleError,
    SkipStep,
    StepLibraryError,
    StepTimeoutError,
    UndefinedStepError,
)
from featurebridge.library import Dictionary, StepLibrary
from featurebridge.types import BridgeConfig, Feature, Scenario

__all__ = [
    "AmbiguousStepError",
    "BridgeConfig",
    "ConfigError",
    "Deferred",
    "Dictionary",
    "Feature",
    "FeatureBridge",
    "FeatureBridgeError",
    "LocaleError",
    "RunSummary",
    "Runner",
    "Scenario",
    "SkipStep",
    "StepContext",
    "StepLibrary",
    "StepLibraryError",
    "StepTimeoutError",
    "SuiteNode",
    "TestNode",
    "UndefinedStepError",
    "load",
    "load_config",
    "read_config",
]
