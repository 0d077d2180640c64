"""
Root-to-node chains of tree nodes.

A `NodePath` identifies one executable case: the ordered ancestors of a node
from the root down to the node itself. All "nearest ancestor with property"
queries used by the execution engine are plain reverse scans over the path.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from casetree.core.node import Node
from casetree.core.types import AssertFunc, RunFunc


@dataclass(frozen=True, eq=False)
class NodePath:
    """Immutable root-to-node sequence of nodes."""

    nodes: tuple[Node, ...] = ()

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __bool__(self) -> bool:
        return bool(self.nodes)

    def __str__(self) -> str:
        return "/".join(self.names())

    @property
    def leaf(self) -> Node | None:
        """Last node of the path, None for an empty path."""
        return self.nodes[-1] if self.nodes else None

    def append(self, node: Node) -> "NodePath":
        """Return a new path extended by `node`."""
        return NodePath(self.nodes + (node,))

    def parent(self) -> "NodePath":
        """Path without its leaf; empty paths stay empty."""
        return NodePath(self.nodes[:-1])

    def names(self) -> list[str]:
        """Name chain of the path (node IDs from root to leaf)."""
        return [node.id for node in self.nodes]

    def runner(self) -> RunFunc | None:
        """Runner of the node closest to the leaf that defines one."""
        for node in reversed(self.nodes):
            if node.run is not None:
                return node.run
        return None

    def variants(self) -> list[Any]:
        """Variants of the node closest to the leaf that declares any."""
        for node in reversed(self.nodes):
            if node.variants:
                return node.variants
        return []

    def asserts(self) -> list[AssertFunc]:
        """
        Assertion hooks applying to the leaf, in invocation order.

        Collection walks leaf-to-root appending each node's own `assert_` and
        stops after the first node that does not inherit assertions. The
        collected hooks run root-to-leaf, followed by the leaf's `assert_self`.

        Returns:
            Hooks in the order the engine invokes them
        """
        collected: list[AssertFunc] = []
        for node in reversed(self.nodes):
            if node.assert_ is not None:
                collected.append(node.assert_)
            if not node.inherit_assert:
                break
        collected.reverse()

        leaf = self.leaf
        if leaf is not None and leaf.assert_self is not None:
            collected.append(leaf.assert_self)
        return collected

    def run(self, t: Any) -> None:
        """Execute this path against reporter `t`, expanding variants."""
        from casetree.execution.variants import run_with_variants

        run_with_variants(self, t)

    def run_variant(self, t: Any, variant: Any) -> None:
        """Execute this path once, inline, with the given variant."""
        from casetree.execution.variants import run_single_variant

        run_single_variant(self, t, variant)
