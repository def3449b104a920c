"""Execution context handed to step functions."""
from __future__ import annotations

import asyncio
import functools
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from featurebridge.engine.nodes import TestNode


class Deferred:
    """Completion handle for a step that finishes later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.future: asyncio.Future = (loop or asyncio.get_running_loop()).create_future()

    def resolve(self, value: Any = None) -> None:
        if not self.future.done():
            self.future.set_result(value)

    def reject(self, error: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(error)

    def callback(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap ``fn``: resolve with its return value, reject if it raises."""
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                self.reject(e)
            else:
                self.resolve(result)
        return wrapper

    def reject_on_error(self, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap ``fn``: reject if it raises, otherwise leave the handle pending."""
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                self.reject(e)
        return wrapper


class StepContext:
    """Thin read/write view over the running TestNode."""

    def __init__(self, test: TestNode):
        self.test = test
        self.is_async = False
        self.task: asyncio.Future | None = None  # wraps the step's awaitable, if any
        self._deferred: Deferred | None = None

    @property
    def ctx(self) -> dict[str, Any]:
        return self.test.parent.context

    @property
    def name(self) -> str:
        return self.test.name

    @property
    def remote(self) -> Any:
        return self.test.remote

    @property
    def session_id(self) -> str | None:
        return self.test.session_id

    @property
    def timeout(self) -> float:
        return self.test.timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        self.test.timeout = value

    @property
    def skipped(self) -> str | None:
        return self.test.skipped

    def defer(self, timeout: float | None = None) -> Deferred:
        """Declare that the step completes through the returned handle."""
        self.is_async = True
        if timeout is not None:
            self.test.timeout = timeout
        if self._deferred is None:
            self._deferred = Deferred()
        return self._deferred

    def skip(self, reason: str = "") -> None:
        self.test.skip(reason)

    def to_dict(self) -> dict[str, Any]:
        return self.test.to_dict()
