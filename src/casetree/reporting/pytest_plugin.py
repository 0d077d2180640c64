"""
pytest integration for casetree.

Enable it from a conftest::

    pytest_plugins = ["casetree.reporting.pytest_plugin"]

and request the `case_reporter` fixture::

    def test_orders(case_reporter):
        ORDER_TREE.run_all(case_reporter)

Failures recorded by sub-runs do not stop sibling sub-runs; once the test
function returns, all of them are reported together as one test failure.
"""

import logging
import traceback
from collections.abc import Callable
from typing import Any

import pytest

from casetree.exceptions import SubTestAbort
from casetree.reporting.base import Reporter, Status, format_args, format_message

logger = logging.getLogger("casetree.pytest")


class PytestReporter:
    """Reporter collecting failures of named sub-runs inside one pytest test."""

    def __init__(self, name: str = "", parent: "PytestReporter | None" = None):
        self.name = name
        self.parent = parent
        self.failures: list[str] = []
        self._failed = False
        self._skipped = False
        self._running = False
        self._finished = False

    @property
    def full_name(self) -> str:
        names = []
        node = self
        while node is not None and node.parent is not None:
            names.append(node.name)
            node = node.parent
        return "/".join(reversed(names))

    @property
    def root(self) -> "PytestReporter":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def _record(self, message: str) -> None:
        node = self
        while node is not None:
            node._failed = True
            node = node.parent
        name = self.full_name
        self.root.failures.append(f"{name}: {message}" if name else message)

    def log(self, *args: Any) -> None:
        logger.info("%s", format_args(*args))

    def logf(self, fmt: str, *args: Any) -> None:
        logger.info("%s", format_message(fmt, *args))

    def error(self, *args: Any) -> None:
        self._record(format_args(*args))

    def errorf(self, fmt: str, *args: Any) -> None:
        self._record(format_message(fmt, *args))

    def fatal(self, *args: Any) -> None:
        self._abort(format_args(*args))

    def fatalf(self, fmt: str, *args: Any) -> None:
        self._abort(format_message(fmt, *args))

    def _abort(self, message: str) -> None:
        self._record(message)
        if self.parent is None:
            self.raise_for_failures()
        raise SubTestAbort(message)

    def skip(self, *args: Any) -> None:
        message = format_args(*args)
        self._skipped = True
        if self.parent is None:
            pytest.skip(message)
        logger.info("SKIP %s: %s", self.full_name, message)
        raise SubTestAbort(message, skipped=True)

    def status(self) -> Status:
        if self._skipped:
            return Status.SKIP
        if self._failed:
            return Status.FAIL
        if self._running:
            return Status.RUNNING
        if self._finished:
            return Status.PASS
        return Status.NONE

    def run(self, name: str, f: Callable[[Reporter], Any]) -> bool:
        sub = PytestReporter(name=name, parent=self)
        sub._running = True
        logger.debug("RUN %s", sub.full_name)
        try:
            f(sub)
        except SubTestAbort:
            pass
        except Exception as e:
            sub._record(f"panic: {e}\n{traceback.format_exc()}")
        finally:
            sub._running = False
            sub._finished = True
        return not sub._failed

    def raise_for_failures(self) -> None:
        """Fail the current pytest test if any failure was recorded."""
        if self.failures:
            summary = "\n".join(self.failures)
            pytest.fail(f"{len(self.failures)} case failure(s):\n{summary}", pytrace=False)


_reporter_key = pytest.StashKey[PytestReporter]()


@pytest.fixture
def case_reporter(request: pytest.FixtureRequest) -> PytestReporter:
    """Reporter for running case trees inside the requesting test."""
    reporter = PytestReporter()
    request.node.stash[_reporter_key] = reporter
    return reporter


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    result = yield
    reporter = item.stash.get(_reporter_key, None)
    if reporter is not None:
        reporter.raise_for_failures()
    return result
