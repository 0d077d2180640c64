"""
casetree structure components.

This package provides tree building, the indexed `Tree` and path
resolution over it.
"""

from casetree.structure.builder import Tree, build, must_build
from casetree.structure.path_resolver import find_child, find_path, walk_to_root

__all__ = [
    "Tree",
    "build",
    "must_build",
    "find_path",
    "find_child",
    "walk_to_root",
]
