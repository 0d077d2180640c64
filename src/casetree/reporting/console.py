"""
Console reporter printing an indented RUN/PASS/FAIL tree.

Used to run case trees outside of a test framework, e.g. as integration
checks from a script. Every line emitted inside a sub-run is prefixed with
tree glyphs; log and error lines carry the `file:line` of their caller.
"""

import os
import sys
import time
import traceback
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from casetree.exceptions import SubTestAbort
from casetree.reporting.base import Reporter, Status, format_args, format_message


class ConsoleOptions(BaseModel):
    """
    Output configuration for ConsoleReporter.

    Streams default to the `sys.stdout` current at write time.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    info_stream: Any = None
    err_stream: Any = None


def format_duration(seconds: float) -> str:
    """Compact duration: microseconds, milliseconds, seconds or m/s."""
    if seconds < 0.001:
        return f"{int(seconds * 1_000_000)}µs"
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    if seconds < 60:
        return f"{int(seconds)}s"
    return f"{int(seconds // 60)}m{int(seconds) % 60}s"


class ConsoleReporter:
    """Reporter writing a RUN/PASS/FAIL tree to text streams."""

    def __init__(
        self,
        name: str = "",
        parent: "ConsoleReporter | None" = None,
        options: ConsoleOptions | None = None,
    ):
        self.name = name
        self.parent = parent
        self.options = options or ConsoleOptions()
        self.depth = parent.depth + 1 if parent is not None else 0
        self._failed = False
        self._skipped = False
        self._started_at: float | None = None
        self._finished_at: float | None = None

    @property
    def failed(self) -> bool:
        return self._failed

    def _info(self):
        return self.options.info_stream or sys.stdout

    def _err(self):
        return self.options.err_stream or sys.stdout

    def prefix(self) -> str:
        if self.depth == 0:
            return ""
        return "│   " * (self.depth - 1) + "├── "

    def _print(self, stream, text: str) -> None:
        print(f"{self.prefix()}{text}", file=stream)

    def _write(self, stream, text: str) -> None:
        # frame 2 is the caller of the public reporter method
        frame = sys._getframe(2)
        location = f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
        self._print(stream, f"{location}: {text}")

    def log(self, *args: Any) -> None:
        self._write(self._info(), format_args(*args))

    def logf(self, fmt: str, *args: Any) -> None:
        self._write(self._info(), format_message(fmt, *args))

    def error(self, *args: Any) -> None:
        self._failed = True
        self._write(self._err(), format_args(*args))

    def errorf(self, fmt: str, *args: Any) -> None:
        self._failed = True
        self._write(self._err(), format_message(fmt, *args))

    def fatal(self, *args: Any) -> None:
        self._failed = True
        message = format_args(*args)
        self._write(self._err(), message)
        raise SubTestAbort(message)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self._failed = True
        message = format_message(fmt, *args)
        self._write(self._err(), message)
        raise SubTestAbort(message)

    def skip(self, *args: Any) -> None:
        self._skipped = True
        message = format_args(*args)
        self._write(self._info(), f"SKIP {message}")
        raise SubTestAbort(message, skipped=True)

    def status(self) -> Status:
        if self._started_at is None:
            return Status.NONE
        if self._skipped:
            return Status.SKIP
        if self._failed:
            return Status.FAIL
        if self._finished_at is None:
            return Status.RUNNING
        return Status.PASS

    def run(self, name: str, f: Callable[[Reporter], Any]) -> bool:
        """
        Run `f` in a named sub-scope.

        Unexpected exceptions inside `f` are printed with their traceback
        and fail the sub-scope; failures propagate to this reporter.

        Returns:
            True if the sub-scope did not fail
        """
        started = time.perf_counter()
        if self._started_at is None:
            self._started_at = started
        sub = ConsoleReporter(name=name, parent=self, options=self.options)
        sub._started_at = started

        self._print(self._info(), f"RUN {name}")
        try:
            f(sub)
        except SubTestAbort:
            pass
        except Exception as e:
            sub._failed = True
            self._print(self._err(), f"panic: {e}")
            print(traceback.format_exc(), end="", file=self._err())
        finally:
            sub._finished_at = time.perf_counter()
            self._finished_at = sub._finished_at
            if sub._failed:
                result = "FAIL"
                self._failed = True
            elif sub._skipped:
                result = "SKIP"
            else:
                result = "PASS"
            self._print(
                self._info(),
                f"{result} {name} ({format_duration(sub._finished_at - started)})",
            )
        return not sub._failed
