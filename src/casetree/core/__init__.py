"""
Core casetree components.

This package provides the node model, root-to-node paths and the hook type
definitions shared by the builder and the execution engine.
"""

from casetree.core.node import Node
from casetree.core.node_path import NodePath
from casetree.core.types import (
    AssertFunc,
    ContextFactory,
    RunFunc,
    SetupFunc,
    TestingAware,
)

__all__ = [
    "Node",
    "NodePath",
    "RunFunc",
    "SetupFunc",
    "AssertFunc",
    "ContextFactory",
    "TestingAware",
]
