"""
Reporter contract consumed by the execution engine.

The engine only needs `errorf` from assertion hooks and `run` as the
grouping boundary for cases and variants; the remaining methods are the
usual logging and failure surface of a test reporter.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class Status(Enum):
    """Outcome of a reporter scope."""

    NONE = "none"
    RUNNING = "running"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@runtime_checkable
class Reporter(Protocol):
    """
    Hierarchical test reporter ("T").

    `error*` marks the current scope failed and continues; `fatal*` and
    `skip` mark it and abort the current sub-run by raising `SubTestAbort`,
    which the owning `run` call catches.
    """

    def run(self, name: str, f: Callable[["Reporter"], Any]) -> bool: ...

    def log(self, *args: Any) -> None: ...

    def logf(self, fmt: str, *args: Any) -> None: ...

    def error(self, *args: Any) -> None: ...

    def errorf(self, fmt: str, *args: Any) -> None: ...

    def fatal(self, *args: Any) -> None: ...

    def fatalf(self, fmt: str, *args: Any) -> None: ...

    def skip(self, *args: Any) -> None: ...

    def status(self) -> Status: ...


def format_args(*args: Any) -> str:
    """Join arguments with spaces, like print."""
    return " ".join(str(arg) for arg in args)


def format_message(fmt: str, *args: Any) -> str:
    """printf-style formatting; the format is used verbatim without args."""
    return fmt % args if args else fmt
