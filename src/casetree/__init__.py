"""
casetree - hierarchical test-case trees for Python test suites

casetree runs declaratively defined trees of test cases: setup chains
accumulate from the root, the nearest runner produces a response, and
inherited assertions check it, all reported through a pluggable reporter.
"""

from importlib.metadata import version

from casetree.core.node import Node
from casetree.core.node_path import NodePath
from casetree.reporting import ConsoleReporter, Reporter
from casetree.structure.builder import Tree, build, must_build

__version__ = version("casetree")

__all__ = [
    "__version__",
    "Node",
    "NodePath",
    "Tree",
    "build",
    "must_build",
    "Reporter",
    "ConsoleReporter",
]
