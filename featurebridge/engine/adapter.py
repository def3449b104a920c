"""Step execution adapter.

A step function may finish synchronously, return an awaitable, call
``context.defer()`` and settle the handle later, or (when registered with
``wants_callback=True``) take the completion callback itself. Every mode ends
in exactly one call of the completion callback.
"""
from __future__ import annotations

import asyncio
import functools
import inspect
from typing import TYPE_CHECKING, Any

from featurebridge.errors import CompletionError

if TYPE_CHECKING:
    from collections.abc import Callable

    from featurebridge.engine.context import StepContext


def wrap_step(fn: Callable[..., Any], *, wants_callback: bool = False) -> Callable[..., Any]:
    """Adapt ``fn(context, *args)`` to ``wrapped(context, *args, done)``."""
    if wants_callback:
        return fn

    @functools.wraps(fn)
    def wrapped(context: StepContext, *args: Any) -> None:
        *args, done = args
        try:
            result = fn(context, *args)
        except Exception as e:
            done(e)
            return

        if context.is_async and not inspect.isawaitable(result):
            result = context.defer().future

        if inspect.isawaitable(result):
            context.task = asyncio.ensure_future(result)
            context.task.add_done_callback(functools.partial(_settle, done))
            return

        done()

    return wrapped


def _settle(done: Callable[..., None], future: asyncio.Future) -> None:
    if future.cancelled():
        done(CompletionError("step awaitable was cancelled before completing"))
    elif future.exception() is not None:
        done(future.exception())
    else:
        done()


def completion_callback(future: asyncio.Future) -> Callable[..., None]:
    """Return ``done(err=None)`` settling ``future``; a second call raises."""
    def done(err: BaseException | None = None) -> None:
        if future.done():
            if future.cancelled():
                return
            raise CompletionError("step completion was reported more than once")
        if err is not None:
            future.set_exception(err)
        else:
            future.set_result(None)
    return done


def execute_step(library: Any, step: str, context: StepContext) -> asyncio.Future:
    """Run ``step`` through the library; the future settles on completion."""
    future = asyncio.get_running_loop().create_future()
    future.add_done_callback(functools.partial(_cancel_task, context))
    library.run(step, context, completion_callback(future))
    return future


def _cancel_task(context: StepContext, future: asyncio.Future) -> None:
    # a step abandoned by its host must not keep running beside the next one
    if future.cancelled() and context.task is not None:
        context.task.cancel()
