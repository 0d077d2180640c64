"""
Path resolution over built case trees.

Two resolution modes are supported: by name chain, walking down from the
root through immediate children, and by node, walking up a child-to-parent
index until the root is reached.
"""

from casetree.core.node import Node
from casetree.core.node_path import NodePath
from casetree.exceptions import PathNotFoundError, TreeConsistencyError


def find_child(node: Node, name: str) -> Node | None:
    """First immediate child of `node` whose ID equals `name`."""
    for child in node.children:
        if child.id == name:
            return child
    return None


def find_path(root: Node | None, names: list[str]) -> NodePath:
    """
    Resolve a name chain starting at the root.

    Params:
        root: Root node of the tree
        names: Node IDs from the root down to the target

    Returns:
        The root-to-target NodePath

    Raises:
        PathNotFoundError: If the chain is empty, the root name differs, or a
            child along the chain is missing
    """
    if not names:
        raise PathNotFoundError(names, "invalid path")
    if root is None:
        raise PathNotFoundError(names, f"root case not found: {names[0]}")
    if root.id != names[0]:
        raise PathNotFoundError(
            names, f"expecting root case: {names[0]}, actual: {root.id}"
        )

    nodes = [root]
    current = root
    for i, name in enumerate(names[1:]):
        current = find_child(current, name)
        if current is None:
            # partial path resolved before the missing name
            partial = "-".join(names[: i + 1])
            raise PathNotFoundError(names, f"case not found: {partial}")
        nodes.append(current)
    return NodePath(tuple(nodes))


def walk_to_root(node: Node, root: Node, child_to_parent: dict[int, Node]) -> NodePath:
    """
    Collect the ancestors of `node` up to `root` and return them root first.

    Params:
        node: Internal node to start from
        root: Internal root of the tree
        child_to_parent: Index from id() of a child to its parent

    Returns:
        The root-to-node NodePath

    Raises:
        TreeConsistencyError: If a node other than the root has no parent
    """
    reversed_nodes = []
    current = node
    while current is not root:
        reversed_nodes.append(current)
        parent = child_to_parent.get(id(current))
        if parent is None:
            raise TreeConsistencyError(current.id)
        current = parent
    reversed_nodes.append(root)
    reversed_nodes.reverse()
    return NodePath(tuple(reversed_nodes))
