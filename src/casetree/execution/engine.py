"""
Execution engine for a single case path.

One execution walks a linear phase sequence::

    NOT_STARTED -> SETTING_UP -> INVOKING -> ASSERTING -> DONE

with an early exit from NOT_STARTED to DONE when the path has no runner.
Only the runner invocation is wrapped in a failure boundary; exceptions from
setup and assert hooks propagate to the reporter's `run(name, f)` grouping,
which marks the enclosing sub-run failed.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

from casetree.core.node_path import NodePath
from casetree.core.types import RunFunc, TestingAware
from casetree.exceptions import RunnerPanicError

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    """Phases of one path execution."""

    NOT_STARTED = "not_started"
    SETTING_UP = "setting_up"
    INVOKING = "invoking"
    ASSERTING = "asserting"
    DONE = "done"


@dataclass
class RunState:
    """Values flowing through one execution of a path with one variant."""

    path: NodePath
    variant: Any = None
    phase: RunPhase = RunPhase.NOT_STARTED
    context: Any = None
    request: Any = None
    response: Any = None
    error: BaseException | None = None
    aborted: bool = False

    def advance(self, phase: RunPhase) -> None:
        logger.debug("%s: %s -> %s", self.path, self.phase.value, phase.value)
        self.phase = phase


def new_context(path: NodePath, t: Any) -> Any:
    """
    Create the zero-valued context for one execution.

    The context factory is the `context_type` of the node class. When the
    new context implements `on_testing_init`, it receives the reporter once,
    before any setup hook runs.

    Params:
        path: Path being executed
        t: Reporter of the current run

    Returns:
        Fresh context, or None when the node class declares no context type
    """
    factory = type(path.leaf).context_type if path.leaf is not None else None
    context = factory() if factory is not None else None
    if t is not None and isinstance(context, TestingAware):
        context.on_testing_init(t)
    return context


def setup_chain(state: RunState, t: Any) -> None:
    """Apply setup hooks root-to-leaf, each replacing (context, request)."""
    state.advance(RunPhase.SETTING_UP)
    for node in state.path:
        if node.setup is not None:
            state.context, state.request = node.setup(
                t, state.context, state.request, state.variant
            )


def invoke_runner(state: RunState, t: Any, runner: RunFunc) -> None:
    """
    Call the runner, converting any raised exception into a RunnerPanicError.

    Test control flow exceptions (BaseException subclasses such as reporter
    aborts and pytest outcomes) are not captured.
    """
    state.advance(RunPhase.INVOKING)
    try:
        state.response = runner(t, state.context, state.request, state.variant)
    except Exception as e:
        logger.debug("runner of %s raised %r", state.path, e)
        state.error = RunnerPanicError(e, traceback.format_exc())


def assert_chain(state: RunState, t: Any) -> None:
    """Invoke the inherited assertion chain, ancestors first."""
    state.advance(RunPhase.ASSERTING)
    for hook in state.path.asserts():
        hook(t, state.context, state.request, state.variant, state.response, state.error)


def execute(path: NodePath, t: Any, variant: Any = None) -> RunState:
    """
    Run one path once with one variant.

    Params:
        path: Root-to-leaf path of the case
        t: Reporter receiving failures
        variant: Active variant passed to every hook

    Returns:
        The final RunState; `aborted` is set when nothing was executed
    """
    state = RunState(path=path, variant=variant)
    if not path:
        t.error("node path is empty")
        state.aborted = True
        state.advance(RunPhase.DONE)
        return state

    runner = path.runner()
    if runner is None:
        t.errorf("missing runner: %s", path.leaf.id)
        state.aborted = True
        state.advance(RunPhase.DONE)
        return state

    state.context = new_context(path, t)
    setup_chain(state, t)
    invoke_runner(state, t, runner)
    assert_chain(state, t)
    state.advance(RunPhase.DONE)
    return state
