"""
Shared test fixtures and utilities for the casetree test suite.
"""

import pytest

from casetree.exceptions import SubTestAbort
from casetree.reporting.base import Status, format_args, format_message

pytest_plugins = ["pytester", "casetree.reporting.pytest_plugin"]


class RecordingReporter:
    """In-memory reporter keeping every sub-run, log and failure.

    Unlike the shipped reporters, `run` does not catch ordinary exceptions,
    so tests can observe what escapes a sub-run.
    """

    def __init__(self, name: str = "", parent: "RecordingReporter | None" = None):
        self.name = name
        self.parent = parent
        self.children: list[RecordingReporter] = []
        self.errors: list[str] = []
        self.logs: list[str] = []
        self.skipped = False

    def run(self, name, f):
        sub = RecordingReporter(name, self)
        self.children.append(sub)
        try:
            f(sub)
        except SubTestAbort:
            pass
        return not sub.failed

    def log(self, *args):
        self.logs.append(format_args(*args))

    def logf(self, fmt, *args):
        self.logs.append(format_message(fmt, *args))

    def error(self, *args):
        self.errors.append(format_args(*args))

    def errorf(self, fmt, *args):
        self.errors.append(format_message(fmt, *args))

    def fatal(self, *args):
        self.errors.append(format_args(*args))
        raise SubTestAbort(format_args(*args))

    def fatalf(self, fmt, *args):
        self.errors.append(format_message(fmt, *args))
        raise SubTestAbort(format_message(fmt, *args))

    def skip(self, *args):
        self.skipped = True
        raise SubTestAbort(format_args(*args), skipped=True)

    def status(self):
        if self.skipped:
            return Status.SKIP
        return Status.FAIL if self.failed else Status.PASS

    @property
    def failed(self) -> bool:
        return bool(self.errors) or any(child.failed for child in self.children)

    def all_errors(self) -> list[str]:
        errors = list(self.errors)
        for child in self.children:
            errors.extend(child.all_errors())
        return errors

    def run_names(self, prefix: str = "") -> list[str]:
        """Names of all nested sub-runs, joined with '/' from this reporter."""
        names = []
        for child in self.children:
            full = f"{prefix}/{child.name}" if prefix else child.name
            names.append(full)
            names.extend(child.run_names(full))
        return names


@pytest.fixture
def recorder() -> RecordingReporter:
    """Fresh in-memory reporter."""
    return RecordingReporter()
