"""Standalone host: run a suite tree in order on one event loop."""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field

from featurebridge.engine.nodes import SuiteNode, TestNode

logger = logging.getLogger(__name__)

GREP_SKIP_REASON = "grep"


@dataclass
class RunSummary:
    passed: list[TestNode] = field(default_factory=list)
    failed: list[TestNode] = field(default_factory=list)
    skipped: list[TestNode] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.passed) + len(self.failed) + len(self.skipped)

    def __bool__(self) -> bool:
        return not self.failed

    def format(self) -> str:
        lines = [f"{len(self.passed)} passed, {len(self.failed)} failed, {len(self.skipped)} skipped"]
        for test in self.failed:
            lines.append(f"  ✗ {test.full_name}: {test.error}")
        return "\n".join(lines)


class Runner:
    """Depth-first, sequential execution of every TestNode under ``root``.

    ``grep`` flags tests whose full name does not match as skipped before
    they run.
    """

    def __init__(self, root: SuiteNode, *, grep: str | re.Pattern | None = None):
        self.root = root
        self.grep = re.compile(grep) if isinstance(grep, str) else grep

    def run(self) -> RunSummary:
        return asyncio.run(self.run_async())

    async def run_async(self) -> RunSummary:
        summary = RunSummary()
        for test in self.root.walk_tests():
            if self.grep is not None and not self.grep.search(test.full_name):
                test.skipped = GREP_SKIP_REASON
            await test.run()
            logger.debug("%s: %s", test.state, test.full_name)
            getattr(summary, test.state).append(test)
        logger.info("Run finished: %s", summary.format().splitlines()[0])
        return summary
