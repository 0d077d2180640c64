"""
Core type definitions for casetree.

This module contains the hook signatures shared by nodes, paths and the
execution engine, and the optional capability a context may implement.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

# run(t, context, request, variant) -> response
RunFunc = Callable[[Any, Any, Any, Any], Any]

# setup(t, context, request, variant) -> (context, request)
SetupFunc = Callable[[Any, Any, Any, Any], tuple[Any, Any]]

# assert(t, context, request, variant, response, error) -> None
AssertFunc = Callable[[Any, Any, Any, Any, Any, BaseException | None], None]

ContextFactory = Callable[[], Any]


@runtime_checkable
class TestingAware(Protocol):
    """Context capability: receive the reporter once before setup runs."""

    def on_testing_init(self, t: Any) -> None: ...
