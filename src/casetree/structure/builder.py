"""
Tree building and indexed access for casetree.

This module contains the `Tree` class and the `build`/`must_build`
constructors. Building turns a root node plus a flat list of additional
nodes (nested, or detached and linked to a parent by ID or reference) into
one validated tree that the caller can no longer mutate from outside.
"""

import logging
from typing import TYPE_CHECKING, Any

from casetree.core.node import Node
from casetree.core.node_path import NodePath
from casetree.exceptions import (
    CaseTreeError,
    DuplicateNodeError,
    MissingParentError,
    NodeNotFoundError,
    NodeTypeMismatchError,
    ParentCycleError,
    ParentMismatchError,
    PathNotFoundError,
    TreeBuildAbort,
    TreeBuildError,
)
from casetree.structure.path_resolver import find_path, walk_to_root

if TYPE_CHECKING:
    from casetree.visualize.decision_tree import DecisionNode, RenderConfig

logger = logging.getLogger(__name__)

# id() of a caller-owned node -> (that node, its internal copy)
NodeMapping = dict[int, tuple[Node, Node]]


class Tree:
    """A built, indexed case tree.

    The tree owns deep copies of the nodes it was built from. Callers may
    still address nodes with their original references: `get_node_path` and
    `run_node` translate them to the internal copies.

    Responsibilities:
    - O(1) lookup of nodes by ID
    - Upward traversal from any internal node to the root
    - Running the whole tree, one subtree, or one case path
    """

    def __init__(self, root: Node, building_node_to_internal_node: NodeMapping | None = None):
        self.root = root
        self._building_node_to_internal_node = building_node_to_internal_node or {}
        self._child_to_parent: dict[int, Node] = {}
        self._id_to_node: dict[str, Node] = {}
        self._init_indices()

    def _init_indices(self) -> None:
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.id:
                self._id_to_node[node.id] = node
            for child in node.children:
                self._child_to_parent[id(child)] = node
            stack.extend(reversed(node.children))

    # ─── lookup ───

    def find_node(self, node_id: str) -> Node | None:
        """Internal node with the given ID, None when absent."""
        return self._id_to_node.get(node_id)

    def get_path(self, node_id: str) -> NodePath:
        """
        Path of the node with the given ID.

        Intended for statically known IDs; an unknown ID is a programming
        error.

        Params:
            node_id: ID of the target node

        Returns:
            Root-to-node NodePath

        Raises:
            NodeNotFoundError: If the ID is empty or not part of the tree
        """
        if not node_id:
            raise NodeNotFoundError(None, "id is empty")
        node = self._id_to_node.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return self.get_node_path(node)

    def get_node_path(self, node: Node) -> NodePath:
        """
        Path of a node given by reference.

        The reference may be either a node the tree was built from or an
        internal node of the tree.

        Raises:
            NodeNotFoundError: If `node` is None
            TreeConsistencyError: If the node is not connected to the root
        """
        if node is None:
            raise NodeNotFoundError(None, "node is nil")
        return walk_to_root(self._internal(node), self.root, self._child_to_parent)

    def find_path(self, names: list[str]) -> NodePath:
        """Resolve a name chain from the root; raises PathNotFoundError."""
        return find_path(self.root, names)

    def get_all_cases(self) -> list[NodePath]:
        """All paths ending in a case node, depth-first in declaration order."""
        cases: list[NodePath] = []

        def collect(path: NodePath) -> None:
            node = path.leaf
            if node.is_case:
                cases.append(path)
            for child in node.children:
                collect(path.append(child))

        collect(NodePath((self.root,)))
        return cases

    def _internal(self, node: Node) -> Node:
        entry = self._building_node_to_internal_node.get(id(node))
        if entry is not None and entry[0] is node:
            return entry[1]
        return node

    # ─── running ───

    def run(self, t: Any) -> None:
        """Run every case, grouping sub-runs by node ID along the hierarchy."""
        self._run(t, NodePath((self.root,)))

    def _run(self, t: Any, path: NodePath) -> None:
        node = path.leaf

        def run_subtree(sub_t: Any) -> None:
            if node.is_case:
                path.run(sub_t)
            for child in node.children:
                self._run(sub_t, path.append(child))

        t.run(node.id, run_subtree)

    def run_all(self, t: Any) -> None:
        """Run every case as a flat sub-run named by its joined name chain."""
        for path in self.get_all_cases():
            t.run("/".join(path.names()), path.run)

    def run_node(self, t: Any, node: Node) -> None:
        """Run the path of a node given by reference; lookup failures are reported."""
        try:
            path = self.get_node_path(node)
        except CaseTreeError as e:
            t.error(e)
            return
        path.run(t)

    def run_path(self, t: Any, names: list[str]) -> None:
        """Run the case at a name chain; an unknown chain is reported, not raised."""
        try:
            path = self.find_path(names)
        except PathNotFoundError as e:
            t.error(e)
            return
        path.run(t)

    def run_path_variant(self, t: Any, names: list[str], variant: Any) -> None:
        """Run the case at a name chain once with the given variant."""
        try:
            path = self.find_path(names)
        except PathNotFoundError as e:
            t.error(e)
            return
        path.run_variant(t, variant)

    # ─── export ───

    def to_decision_tree(self, config: "RenderConfig | None" = None) -> "DecisionNode | None":
        """Generic decision-tree export, see `casetree.visualize`."""
        from casetree.visualize import to_decision_tree

        return to_decision_tree(self, config)

    def to_mermaid(self) -> str:
        """Mermaid flowchart export, see `casetree.visualize`."""
        from casetree.visualize import to_mermaid

        return to_mermaid(self)


def build(root: Node | None, nodes: list[Node] | None = None) -> Tree:
    """Build a tree from a root node and additional nodes.

    Additional nodes without parent linkage attach under the root, in input
    order. Nodes linked with `parent_id` or `parent_node` attach under that
    parent. The whole forest is copied first, so later mutation of the
    supplied nodes does not affect the tree.

    Params:
        root: The root node
        nodes: Additional nodes, nested or detached

    Returns:
        The built Tree

    Raises:
        TreeBuildError: If the root is missing
        NodeTypeMismatchError: If nodes of different classes are mixed
        DuplicateNodeError: If a non-empty ID occurs twice
        MissingParentError: If a declared parent is not in the forest
        ParentMismatchError: If parent ID and parent reference disagree
        ParentCycleError: If a node would become its own ancestor
    """
    if root is None:
        raise TreeBuildError("root is nil")
    all_nodes = [root, *(nodes or [])]
    _check_node_types(all_nodes, type(root))

    originals: NodeMapping = {}
    copies = [_copy_node(node, originals) for node in all_nodes]
    id_mapping = _build_id_mapping(copies)

    building_root = copies[0]
    for node in copies[1:]:
        parent = _resolve_parent(node, building_root, id_mapping, originals)
        if _contains(node, parent):
            raise ParentCycleError(node.id, parent.id)
        parent.children.append(node)

    tree = Tree(building_root, originals)
    logger.debug("built tree %r with %d indexed nodes", building_root.id, len(tree._id_to_node))
    return tree


def must_build(root: Node | None, nodes: list[Node] | None = None) -> Tree:
    """Build a tree that is known statically; failure aborts the process.

    Raises:
        TreeBuildAbort: If `build` fails
    """
    try:
        return build(root, nodes)
    except TreeBuildError as e:
        logger.critical("tree definition is invalid: %s", e)
        raise TreeBuildAbort(e) from e


def _check_node_types(nodes: list[Node], node_class: type) -> None:
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if type(node) is not node_class:
            raise NodeTypeMismatchError(getattr(node, "id", ""), node_class, type(node))
        stack.extend(node.children)


def _copy_node(node: Node, originals: NodeMapping) -> Node:
    """Copy `node` and its descendants; hooks are shared, containers are not."""

    def copy_one(original: Node) -> Node:
        copied = original.model_copy(
            update={
                "tags": list(original.tags),
                "variants": list(original.variants),
                "children": [],
            }
        )
        originals[id(original)] = (original, copied)
        return copied

    root_copy = copy_one(node)
    stack = [(node, root_copy)]
    while stack:
        original, copied = stack.pop()
        for child in original.children:
            child_copy = copy_one(child)
            copied.children.append(child_copy)
            stack.append((child, child_copy))
    return root_copy


def _build_id_mapping(copies: list[Node]) -> dict[str, Node]:
    mapping: dict[str, Node] = {}
    stack = list(reversed(copies))
    while stack:
        node = stack.pop()
        if node.id:
            if node.id in mapping:
                raise DuplicateNodeError(node.id)
            mapping[node.id] = node
        stack.extend(reversed(node.children))
    return mapping


def _resolve_parent(
    node: Node,
    building_root: Node,
    id_mapping: dict[str, Node],
    originals: NodeMapping,
) -> Node:
    if not node.parent_id and node.parent_node is None:
        return building_root

    by_id = None
    by_node = None
    if node.parent_id:
        by_id = id_mapping.get(node.parent_id)
        if by_id is None:
            raise MissingParentError(node.id, node.description, node.parent_id)
    if node.parent_node is not None:
        entry = originals.get(id(node.parent_node))
        if entry is None or entry[0] is not node.parent_node:
            raise MissingParentError(node.id, node.description)
        by_node = entry[1]

    if by_id is not None and by_node is not None and by_id is not by_node:
        raise ParentMismatchError(
            node.id, node.description, node.parent_id, node.parent_node.id
        )
    return by_node if by_node is not None else by_id


def _contains(subtree: Node, target: Node) -> bool:
    stack = [subtree]
    while stack:
        node = stack.pop()
        if node is target:
            return True
        stack.extend(node.children)
    return False
