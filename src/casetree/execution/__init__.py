"""
casetree execution components.

This package provides the single-path execution engine and the variant
expansion layered on top of it.
"""

from casetree.execution.engine import (
    RunPhase,
    RunState,
    assert_chain,
    execute,
    invoke_runner,
    new_context,
    setup_chain,
)
from casetree.execution.variants import (
    run_single_variant,
    run_with_variants,
    variant_name,
    variant_names,
)

__all__ = [
    "RunPhase",
    "RunState",
    "execute",
    "new_context",
    "setup_chain",
    "invoke_runner",
    "assert_chain",
    "run_with_variants",
    "run_single_variant",
    "variant_name",
    "variant_names",
]
