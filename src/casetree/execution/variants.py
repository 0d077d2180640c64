"""
Variant expansion for case paths.

A path with several variants runs once per variant, each under its own
named sub-run. Zero or one variant runs inline so that single-variant paths
keep the same reporter grouping as plain ones.
"""

from typing import Any

from casetree.core.node_path import NodePath
from casetree.execution.engine import execute


def variant_name(variant: Any) -> str:
    """Sub-run name of a variant."""
    return str(variant)


def variant_names(variants: list[Any]) -> list[str]:
    """
    Sub-run names for a fan-out, unique within it.

    Repeated names get a `#NN` counter, so the variants `1` and `"1"` run as
    `1` and `1#01`.
    """
    names: list[str] = []
    used: set[str] = set()
    seen: dict[str, int] = {}
    for variant in variants:
        base = variant_name(variant)
        name = base
        while name in used:
            seen[base] = seen.get(base, 0) + 1
            name = f"{base}#{seen[base]:02d}"
        used.add(name)
        names.append(name)
    return names


def run_with_variants(path: NodePath, t: Any) -> None:
    """Run `path` with the variants of its nearest declaring node."""
    variants = path.variants()
    if not variants:
        execute(path, t, None)
        return
    if len(variants) == 1:
        execute(path, t, variants[0])
        return

    # runner check happens once for the whole fan-out
    if path and path.runner() is None:
        t.errorf("missing runner: %s", path.leaf.id)
        return
    for name, variant in zip(variant_names(variants), variants):
        t.run(name, lambda sub_t, v=variant: execute(path, sub_t, v))


def run_single_variant(path: NodePath, t: Any, variant: Any) -> None:
    """Run `path` inline with exactly one given variant."""
    execute(path, t, variant)
