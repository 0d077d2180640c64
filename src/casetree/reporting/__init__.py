"""
casetree reporters.

This package provides the reporter contract used by the execution engine
and a console implementation. The pytest adapter lives in
`casetree.reporting.pytest_plugin` and is only imported by pytest.
"""

from casetree.reporting.base import Reporter, Status
from casetree.reporting.console import ConsoleOptions, ConsoleReporter, format_duration

__all__ = [
    "Reporter",
    "Status",
    "ConsoleOptions",
    "ConsoleReporter",
    "format_duration",
]
