"""
Exception classes for casetree tree building, resolution and execution.

This module defines specific exception types for the different error
conditions that can occur while building a case tree, resolving paths
inside it and running the user-supplied runner of a case.
"""

import traceback


class CaseTreeError(Exception):
    """Base exception for all casetree-related errors."""

    pass


class TreeBuildError(CaseTreeError):
    """Raised when a tree cannot be built from the supplied nodes."""

    def __init__(self, message: str):
        """
        Initialize the exception.

        Params:
            message: Description of the construction failure
        """
        super().__init__(message)


class DuplicateNodeError(TreeBuildError):
    """Raised when two nodes of one tree share the same non-empty ID."""

    def __init__(self, node_id: str):
        """
        Initialize the exception.

        Params:
            node_id: The ID declared more than once
        """
        self.node_id = node_id
        super().__init__(f"duplicate node: {node_id}")


class MissingParentError(TreeBuildError):
    """Raised when a detached node points at a parent that is not in the tree."""

    def __init__(self, node_id: str, description: str, parent_id: str = ""):
        """
        Initialize the exception.

        Params:
            node_id: ID of the detached node
            description: Description of the detached node
            parent_id: The declared parent ID, empty when linked by reference
        """
        self.node_id = node_id
        self.description = description
        self.parent_id = parent_id
        message = f"missing parent for: {node_id}({description})"
        if parent_id:
            message += f", parentID: {parent_id}"
        super().__init__(message)


class ParentMismatchError(TreeBuildError):
    """Raised when parent ID and parent reference resolve to different nodes."""

    def __init__(
        self, node_id: str, description: str, parent_id: str, parent_node_id: str
    ):
        """
        Initialize the exception.

        Params:
            node_id: ID of the detached node
            description: Description of the detached node
            parent_id: The declared parent ID
            parent_node_id: ID of the node passed as parent reference
        """
        self.node_id = node_id
        self.parent_id = parent_id
        self.parent_node_id = parent_node_id
        super().__init__(
            f"parent mismatch for: {node_id}({description}), "
            f"parentID: {parent_id}, parentNode: {parent_node_id}"
        )


class ParentCycleError(TreeBuildError):
    """Raised when a detached node would become its own ancestor."""

    def __init__(self, node_id: str, parent_id: str):
        self.node_id = node_id
        self.parent_id = parent_id
        super().__init__(f"cyclic parent for: {node_id}, parent: {parent_id}")


class NodeTypeMismatchError(TreeBuildError):
    """Raised when a tree mixes node classes."""

    def __init__(self, node_id: str, expected: type, actual: type):
        """
        Initialize the exception.

        Params:
            node_id: ID of the offending node
            expected: The node class of the root
            actual: The node class found
        """
        self.node_id = node_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"node type mismatch for: {node_id}, "
            f"expected {expected.__name__}, got {actual.__name__}"
        )


class TreeBuildAbort(BaseException):
    """Raised by `must_build` for trees that are expected to always build.

    Derives from BaseException so that it escapes ordinary `except Exception`
    handlers, the same way an unrecoverable programming error should.
    """

    def __init__(self, error: TreeBuildError):
        self.error = error
        super().__init__(str(error))


class NodeNotFoundError(CaseTreeError):
    """Raised when a node requested by ID or reference is not part of the tree."""

    def __init__(self, node_id: str | None, reason: str = "node not found"):
        """
        Initialize the exception.

        Params:
            node_id: The requested ID (None for a missing node reference)
            reason: Short failure reason
        """
        self.node_id = node_id
        if node_id:
            super().__init__(f"{reason}: {node_id}")
        else:
            super().__init__(reason)


class PathNotFoundError(CaseTreeError):
    """Raised when a name chain does not resolve to a path in the tree."""

    def __init__(self, names: list[str], message: str):
        """
        Initialize the exception.

        Params:
            names: The requested name chain
            message: Description of where resolution stopped
        """
        self.names = list(names)
        super().__init__(message)


class TreeConsistencyError(CaseTreeError):
    """Raised when the internal parent index cannot reach the root."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"missing parent: {node_id}")


class RunnerPanicError(CaseTreeError):
    """Failure captured around a runner invocation.

    Carries the original exception as `cause` together with the formatted
    stack at the point of failure. The error message is the text of the
    cause, or `panic: <repr>` when the cause carries no text.
    """

    def __init__(self, cause: BaseException, stack: str | None = None):
        """
        Initialize the exception.

        Params:
            cause: The exception raised by the runner
            stack: Formatted traceback; computed from `cause` when omitted
        """
        self.cause = cause
        if stack is None:
            stack = "".join(
                traceback.format_exception(type(cause), cause, cause.__traceback__)
            )
        self.stack = stack
        text = str(cause)
        super().__init__(text if text else f"panic: {cause!r}")
        self.__cause__ = cause


class SubTestAbort(BaseException):
    """Unwinds the current reporter sub-run after `fatal` or `skip`.

    Derives from BaseException so runner failure capture and user code with
    `except Exception` do not intercept it.
    """

    def __init__(self, message: str = "", skipped: bool = False):
        self.skipped = skipped
        super().__init__(message)
