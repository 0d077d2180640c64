"""
Generic decision-tree shape consumed by tree renderers.

A built case tree is converted into `DecisionNode`s (id, label, conditions,
children) so that renderers do not depend on the node model or its hooks.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from attrs import frozen

if TYPE_CHECKING:
    from casetree.core.node import Node
    from casetree.structure.builder import Tree


@frozen
class NodeStyle:
    """Visual properties of one rendered node."""

    shape: str = ""  # rectangle | diamond
    fill: str = ""
    stroke: str = ""
    stroke_width: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = {
            "shape": self.shape,
            "fill": self.fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
        }
        return {key: value for key, value in data.items() if value}


@frozen
class RenderConfig:
    """Layout parameters for decision-tree renderers."""

    level_height: float
    node_spacing: float
    node_padding: float
    base_node_width: float
    leaf_node_spacing: float
    parent_child_spacing: float
    vertical_span_coeff: float
    default_style: NodeStyle | None = None


def default_config() -> RenderConfig:
    """Default layout: compact nodes, top-aligned levels."""
    return RenderConfig(
        level_height=20,
        node_spacing=20,
        node_padding=2,
        base_node_width=120,
        leaf_node_spacing=10,
        parent_child_spacing=10,
        vertical_span_coeff=0.0009,
        default_style=NodeStyle(
            shape="rectangle",
            fill="url(#nodeGradient)",
            stroke="#666666",
            stroke_width=1,
        ),
    )


@dataclass
class DecisionNode:
    """One node of the generic decision tree."""

    id: str
    label: str
    conditions: dict[str, Any] | None = None
    style: NodeStyle | None = None
    children: list["DecisionNode"] = field(default_factory=list)

    def clone(self) -> "DecisionNode":
        """Deep copy of the node and its children; condition values are shared."""
        return DecisionNode(
            id=self.id,
            label=self.label,
            conditions=dict(self.conditions) if self.conditions is not None else None,
            style=self.style,
            children=[child.clone() for child in self.children],
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty conditions, style and children are omitted."""
        data: dict[str, Any] = {"id": self.id, "label": self.label}
        if self.conditions:
            data["conditions"] = self.conditions
        if self.style is not None:
            data["style"] = self.style.to_dict()
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def convert_node(node: Optional["Node"], style: NodeStyle | None = None) -> DecisionNode | None:
    """
    Convert one node and its descendants.

    Params:
        node: Node to convert
        style: Style assigned to every converted node

    Returns:
        DecisionNode labelled with the description (falling back to the ID),
        with the node tags as `conditions["tags"]` when present
    """
    if node is None:
        return None
    conditions = {"tags": list(node.tags)} if node.tags else None
    children = [convert_node(child, style) for child in node.children]
    return DecisionNode(
        id=node.id,
        label=node.label(),
        conditions=conditions,
        style=style,
        children=children,
    )


def to_decision_tree(
    tree: Optional["Tree"], config: RenderConfig | None = None
) -> DecisionNode | None:
    """Generic decision-tree view of a built tree; None for a missing tree.

    Params:
        tree: Built tree to convert
        config: Render configuration whose `default_style` is attached to
            every node; no style is attached without one
    """
    if tree is None or tree.root is None:
        return None
    style = config.default_style if config is not None else None
    return convert_node(tree.root, style)
