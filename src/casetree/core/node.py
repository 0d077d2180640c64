"""
Core Node model for casetree.

A node is one declaratively-defined unit of test behavior: an optional
setup step, an optional runner, assertions, variants and nested children.
Nodes are plain pydantic models; a tree is monomorphic over one node class,
which is also where the per-run context factory is declared.
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from casetree.core.types import AssertFunc, ContextFactory, RunFunc, SetupFunc


class Node(BaseModel):
    """
    One test definition in the hierarchy.

    Subclass to fix the context type for a whole tree::

        class OrderCase(Node):
            context_type = OrderContext

    Every node of a tree must be an instance of the same class as its root.

    Attributes:
        id: Unique ID within the tree; also the name used by name-chain lookup
        parent_id: Parent ID for nodes supplied detached from the root
        parent_node: Parent reference for detached nodes, alternative to parent_id
        description: Human readable description
        tags: Grouping labels
        inherit_assert: Whether ancestor assertions still apply to this node
        run: Runner producing a response from (t, context, request, variant)
        setup: Hook returning the new (context, request) pair
        assert_: Assertion hook, also accepted as ``assert``
        assert_self: Assertion run last when this node is the leaf of a path
        variants: Alternate inputs the case is executed against
        children: Nested nodes
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    context_type: ClassVar[ContextFactory | None] = None

    id: str = ""
    parent_id: str = ""
    parent_node: Optional["Node"] = None
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    inherit_assert: bool = True

    run: RunFunc | None = None
    setup: SetupFunc | None = None
    assert_: AssertFunc | None = Field(default=None, alias="assert")
    assert_self: AssertFunc | None = None

    variants: list[Any] = Field(default_factory=list)
    children: list["Node"] = Field(default_factory=list)

    @property
    def is_case(self) -> bool:
        """A node is an executable case when it declares an assertion."""
        return self.assert_ is not None or self.assert_self is not None

    def label(self) -> str:
        """Description if set, otherwise the ID."""
        return self.description or self.id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, children={len(self.children)})"


Node.model_rebuild()
