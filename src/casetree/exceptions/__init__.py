"""
casetree exception classes.

This package provides all exception types used throughout casetree for
consistent error handling and reporting.
"""

from casetree.exceptions.core import (
    CaseTreeError,
    DuplicateNodeError,
    MissingParentError,
    NodeNotFoundError,
    NodeTypeMismatchError,
    ParentCycleError,
    ParentMismatchError,
    PathNotFoundError,
    RunnerPanicError,
    SubTestAbort,
    TreeBuildAbort,
    TreeBuildError,
    TreeConsistencyError,
)

__all__ = [
    "CaseTreeError",
    "TreeBuildError",
    "DuplicateNodeError",
    "MissingParentError",
    "ParentMismatchError",
    "ParentCycleError",
    "NodeTypeMismatchError",
    "TreeBuildAbort",
    "NodeNotFoundError",
    "PathNotFoundError",
    "TreeConsistencyError",
    "RunnerPanicError",
    "SubTestAbort",
]
