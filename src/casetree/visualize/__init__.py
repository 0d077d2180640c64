"""
casetree visualization exports.

This package converts built trees into the generic decision-tree shape used
by renderers, and into Mermaid flowchart source.
"""

from casetree.visualize.decision_tree import (
    DecisionNode,
    NodeStyle,
    RenderConfig,
    convert_node,
    default_config,
    to_decision_tree,
)
from casetree.visualize.mermaid import to_mermaid

__all__ = [
    "DecisionNode",
    "NodeStyle",
    "RenderConfig",
    "convert_node",
    "default_config",
    "to_decision_tree",
    "to_mermaid",
]
