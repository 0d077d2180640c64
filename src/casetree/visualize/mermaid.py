"""Generate a Mermaid flowchart from a built case tree."""

import html
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from casetree.core.node import Node
    from casetree.structure.builder import Tree


def _node_id(node: "Node", ids: dict[int, str], used: set[str]) -> str:
    if id(node) in ids:
        return ids[id(node)]
    if node.id:
        base = node.id.replace(" ", "_").replace("-", "_")
    else:
        base = f"node_{len(ids)}"
    # sanitized and generated IDs may collide with real ones
    mermaid_id = base
    suffix = 2
    while mermaid_id in used:
        mermaid_id = f"{base}_{suffix}"
        suffix += 1
    used.add(mermaid_id)
    ids[id(node)] = mermaid_id
    return mermaid_id


def _node_label(node: "Node") -> str:
    if not node.description and not node.id:
        return "Node"
    if not node.description:
        return node.id
    if not node.id:
        return node.description
    return f"{node.id}<br><i>{html.escape(node.description)}</i>"


def _escape_label(label: str) -> str:
    # HTML tags are kept, Mermaid renders them
    return label.replace('"', '\\"')


def to_mermaid(tree: "Tree") -> str:
    """
    Top-down Mermaid flowchart of the tree.

    Root is drawn as a rounded rectangle, leaves as rectangles and inner
    nodes as rhombi; every edge points from parent to child.

    Params:
        tree: Built tree to draw

    Returns:
        Mermaid source starting with ``graph TD;``
    """
    lines = ["graph TD;"]
    if tree is None or tree.root is None:
        return "\n".join(lines) + "\n"

    ids: dict[int, str] = {}
    used: set[str] = set()
    stack: list[tuple["Node", str]] = [(tree.root, "")]
    while stack:
        node, parent_id = stack.pop()
        nid = _node_id(node, ids, used)
        label = _escape_label(_node_label(node))
        if not parent_id:
            lines.append(f'    {nid}("{label}");')
        elif not node.children:
            lines.append(f'    {nid}["{label}"];')
        else:
            lines.append(f'    {nid}{{"{label}"}};')
        if parent_id:
            lines.append(f"    {parent_id} --> {nid};")
        stack.extend((child, nid) for child in reversed(node.children))
    return "\n".join(lines) + "\n"
