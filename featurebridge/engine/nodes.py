"""Suite / test node model driven by a host runner."""
from __future__ import annotations

import asyncio
import inspect
import weakref
from typing import TYPE_CHECKING, Any, Union

from featurebridge.errors import SkipStep, StepTimeoutError
from featurebridge.types import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class _Node:
    def __init__(self, name: str, parent: SuiteNode | None = None):
        self.name = name
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> SuiteNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def remote(self) -> Any:
        parent = self.parent
        return parent.remote if parent is not None else None

    @property
    def session_id(self) -> str | None:
        parent = self.parent
        return parent.session_id if parent is not None else None

    @property
    def full_name(self) -> str:
        names: list[str] = []
        node: _Node | None = self
        while node is not None:
            if node.name:
                names.append(node.name)
            node = node.parent
        return " - ".join(reversed(names))


class SuiteNode(_Node):
    """Groups child suites and tests; children keep insertion order."""

    def __init__(
        self,
        name: str,
        parent: SuiteNode | None = None,
        context: dict[str, Any] | None = None,
        *,
        remote: Any = None,
        session_id: str | None = None,
    ):
        super().__init__(name, parent)
        self.context = context
        self.children: list[Node] = []
        self._remote = remote
        self._session_id = session_id

    @property
    def remote(self) -> Any:
        return self._remote if self._remote is not None else super().remote

    @property
    def session_id(self) -> str | None:
        return self._session_id if self._session_id is not None else super().session_id

    def add(self, child: Node) -> Node:
        self.children.append(child)
        return child

    def walk_tests(self) -> Iterator[TestNode]:
        for child in self.children:
            if isinstance(child, SuiteNode):
                yield from child.walk_tests()
            else:
                yield child

    def __repr__(self) -> str:
        return f"<SuiteNode {self.name!r} children={len(self.children)}>"


class TestNode(_Node):
    """Leaf node bound to one step.

    ``body(test)`` either finishes synchronously or returns an awaitable that
    completes when the step does.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        name: str,
        parent: SuiteNode | None = None,
        body: Callable[[TestNode], Any] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(name, parent)
        self.body = body
        self.timeout = timeout
        self.state = "pending"  # pending | running | passed | failed | skipped
        self.skipped: str | None = None  # skip reason; a host may set it before run()
        self.error: BaseException | None = None

    def skip(self, reason: str = "") -> None:
        raise SkipStep(reason)

    async def run(self) -> None:
        if self.skipped is not None:
            self.state = "skipped"
            return
        deadline = None
        try:
            result = self.body(self) if self.body else None
            if inspect.isawaitable(result):
                async with asyncio.timeout(self.timeout) as deadline:
                    await result
        except SkipStep as skip:
            self.skipped = skip.reason
            self.state = "skipped"
        except TimeoutError as e:
            # a TimeoutError the step itself raised or rejected with is kept as is
            if deadline is not None and deadline.expired():
                self.error = StepTimeoutError(f"Timeout reached on {self.full_name} after {self.timeout}s")
            else:
                self.error = e
            self.state = "failed"
        except Exception as e:
            self.error = e
            self.state = "failed"
        else:
            if self.skipped is not None:
                self.state = "skipped"
            else:
                self.state = "passed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "id": self.full_name,
            "session_id": self.session_id,
            "timeout": self.timeout,
            "state": self.state,
            "skipped": self.skipped,
            "error": None if self.error is None else repr(self.error),
        }

    def __repr__(self) -> str:
        return f"<TestNode {self.name!r} {self.state}>"


Node = Union[SuiteNode, TestNode]
