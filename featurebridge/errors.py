"""Exception taxonomy.

Load-time errors (config, locale, step modules) abort the whole load.
Step-time errors are delivered through a step's completion callback and
fail only that step. ``SkipStep`` is not an error: it carries a reason.
"""
from __future__ import annotations


class FeatureBridgeError(Exception):
    pass


class ConfigError(FeatureBridgeError, ValueError):
    pass


class LocaleError(FeatureBridgeError, LookupError):
    pass


class StepLibraryError(FeatureBridgeError, ImportError):
    pass


class UndefinedStepError(FeatureBridgeError):
    def __init__(self, step: str):
        super().__init__(f"Undefined step: [{step}]")
        self.step = step


class AmbiguousStepError(FeatureBridgeError):
    def __init__(self, step: str, signatures: list[str]):
        listing = ", ".join(repr(s) for s in signatures)
        super().__init__(f"Ambiguous step: [{step}] matches {listing}")
        self.step = step
        self.signatures = signatures


class StepTimeoutError(FeatureBridgeError, TimeoutError):
    pass


class CompletionError(FeatureBridgeError, RuntimeError):
    pass


class IndexFrozenError(FeatureBridgeError, RuntimeError):
    pass


class SkipStep(Exception):
    """Raised by ``skip()`` to abort a step without failing it."""

    def __init__(self, reason: str = ""):
        super().__init__(reason)
        self.reason = reason
