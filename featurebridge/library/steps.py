"""Step library: map step text to registered step functions."""
from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from featurebridge.engine.adapter import wrap_step
from featurebridge.errors import AmbiguousStepError, StepLibraryError, UndefinedStepError
from featurebridge.library.dictionary import Dictionary

if TYPE_CHECKING:
    from collections.abc import Callable

    from featurebridge.engine.context import StepContext
    from featurebridge.localisation import Language


@dataclass
class Macro:
    signature: str
    pattern: re.Pattern
    fn: Callable[..., Any]  # adapter-wrapped
    source: Callable[..., Any]

    def match(self, text: str) -> re.Match | None:
        return self.pattern.fullmatch(text)

    def score(self, text: str) -> float:
        return difflib.SequenceMatcher(None, self.signature, text).ratio()


class StepLibrary:
    def __init__(self, language: Language, dictionary: Dictionary | None = None):
        self.language = language
        self.dictionary = dictionary if dictionary is not None else Dictionary()
        self.macros: list[Macro] = []

    def define(
        self,
        signatures: str | list[str],
        fn: Callable[..., Any] | None = None,
        *,
        wants_callback: bool = False,
    ):
        """Register ``fn`` for one or more signatures.

        Without ``fn`` this returns a decorator. ``wants_callback`` declares
        that ``fn`` takes the completion callback as its last argument and
        will call it itself.
        """
        if fn is None:
            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                self.define(signatures, func, wants_callback=wants_callback)
                return func
            return decorator

        wrapped = wrap_step(fn, wants_callback=wants_callback)
        for signature in [signatures] if isinstance(signatures, str) else signatures:
            if any(m.signature == signature for m in self.macros):
                raise StepLibraryError(f"Duplicate step definition: {signature!r}")
            pattern = re.compile(self.dictionary.expand(signature), re.DOTALL)
            self.macros.append(Macro(signature, pattern, wrapped, fn))
        return fn

    def given(self, signatures: str | list[str], fn=None, *, wants_callback: bool = False):
        return self._keyworded("given", signatures, fn, wants_callback)

    def when(self, signatures: str | list[str], fn=None, *, wants_callback: bool = False):
        return self._keyworded("when", signatures, fn, wants_callback)

    def then(self, signatures: str | list[str], fn=None, *, wants_callback: bool = False):
        return self._keyworded("then", signatures, fn, wants_callback)

    def find(self, text: str) -> tuple[Macro, tuple[Any, ...]]:
        candidates = [(m, match) for m in self.macros if (match := m.match(text))]
        if not candidates:
            raise UndefinedStepError(text)
        if len(candidates) == 1:
            macro, match = candidates[0]
            return macro, match.groups()

        ranked = sorted(candidates, key=lambda c: c[0].score(text), reverse=True)
        best, runner_up = ranked[0], ranked[1]
        if best[0].score(text) == runner_up[0].score(text):
            tied = [m.signature for m, _ in ranked if m.score(text) == best[0].score(text)]
            raise AmbiguousStepError(text, tied)
        return best[0], best[1].groups()

    def run(self, text: str, context: StepContext, done: Callable[..., None]) -> Any:
        """Run the step matching ``text``; the outcome arrives through ``done``."""
        try:
            macro, args = self.find(text)
        except (UndefinedStepError, AmbiguousStepError) as e:
            return done(e)
        return macro.fn(context, *args, done)

    def _keyworded(self, kind: str, signatures, fn, wants_callback: bool):
        prefix = self.language.step_prefix(kind)
        if isinstance(signatures, str):
            prefixed: str | list[str] = prefix + signatures
        else:
            prefixed = [prefix + s for s in signatures]
        return self.define(prefixed, fn, wants_callback=wants_callback)
