"""
End-to-end scenarios over built case trees.

These tests build small but realistic trees (an orders API with shared
setup, nested groups and variants) and run them through the tree level
entry points: run, run_all, run_node, run_path and get_all_cases.
"""

from dataclasses import dataclass, field

import pytest

from casetree import Node, build
from casetree.exceptions import RunnerPanicError


@dataclass
class Request:
    value: int = 0


@dataclass
class OrdersContext:
    orders: dict = field(default_factory=dict)
    reporter: object = None

    def on_testing_init(self, t):
        self.reporter = t


class OrderCase(Node):
    context_type = OrdersContext


def seed(t, ctx, req, variant):
    ctx.orders["o-1"] = {"status": "open"}
    return ctx, req


def lookup(t, ctx, req, variant):
    return ctx.orders[req]


def expect_status(status):
    def check(t, ctx, req, variant, resp, err):
        if err is not None:
            t.errorf("unexpected error: %s", err)
            return
        if resp["status"] != status:
            t.errorf("expect status %s, got %s", status, resp["status"])

    return check


@pytest.fixture
def orders_tree():
    root = OrderCase(id="orders", setup=seed, run=lookup)
    nodes = [
        OrderCase(id="get", description="Get order"),
        OrderCase(
            id="existing",
            parent_id="get",
            setup=lambda t, ctx, req, v: (ctx, "o-1"),
            assert_=expect_status("open"),
        ),
        OrderCase(
            id="missing",
            parent_id="get",
            setup=lambda t, ctx, req, v: (ctx, "o-404"),
            assert_=lambda t, ctx, req, v, resp, err: None if err else t.error("expected error"),
        ),
        OrderCase(
            id="closed",
            parent_id="get",
            setup=lambda t, ctx, req, v: (ctx, "o-1"),
            assert_=expect_status("closed"),
        ),
    ]
    return build(root, nodes)


class TestAccumulation:
    """Test setup accumulation across detached nodes."""

    def test_setup_then_double(self, recorder):
        """root(v=1) / child(v+=10, run v*2) asserts 22."""
        results = []

        def check(t, ctx, req, variant, resp, err):
            results.append(resp)
            if resp != 22:
                t.errorf("expect 22, got %s", resp)

        root = Node(id="root", setup=lambda t, ctx, req, v: (ctx, Request(1)))
        child = Node(
            id="child",
            parent_id="root",
            setup=lambda t, ctx, req, v: (ctx, Request(req.value + 10)),
            run=lambda t, ctx, req, v: req.value * 2,
            assert_=check,
        )
        build(root, [child]).run_path(recorder, ["root", "child"])

        assert results == [22]
        assert not recorder.failed

    def test_parent_id_path(self):
        """A node attached by parent_id ends its path with [..., parent, node]."""
        tree = build(Node(id="root"), [Node(id="x"), Node(id="y", parent_id="x")])
        assert tree.get_path("y").names()[-2:] == ["x", "y"]


class TestTreeRun:
    """Test hierarchical and flat iteration."""

    def test_get_all_cases(self, orders_tree):
        """Only nodes with assertions are cases, depth-first."""
        names = [str(path) for path in orders_tree.get_all_cases()]
        assert names == ["orders/get/existing", "orders/get/missing", "orders/get/closed"]

    def test_hierarchical_grouping(self, orders_tree, recorder):
        """run groups sub-runs by node ID along the hierarchy."""
        orders_tree.run(recorder)

        assert recorder.run_names() == [
            "orders",
            "orders/get",
            "orders/get/existing",
            "orders/get/missing",
            "orders/get/closed",
        ]
        assert recorder.all_errors() == ["expect status closed, got open"]

    def test_flat_grouping(self, orders_tree, recorder):
        """run_all uses one sub-run per case named by its joined path."""
        orders_tree.run_all(recorder)

        assert [child.name for child in recorder.children] == [
            "orders/get/existing",
            "orders/get/missing",
            "orders/get/closed",
        ]
        failed = [child.name for child in recorder.children if child.failed]
        assert failed == ["orders/get/closed"]

    def test_context_is_testing_aware(self, recorder):
        """The orders context receives the sub-run reporter."""
        seen = []
        case = OrderCase(
            id="probe",
            assert_=lambda t, ctx, req, v, resp, err: seen.append(ctx.reporter is t),
        )
        tree = build(OrderCase(id="orders", run=lambda *a: None), [case])
        tree.run(recorder)

        assert seen == [True]

    def test_runner_error_reaches_assertions(self, orders_tree, recorder):
        """A KeyError from the runner is passed on as RunnerPanicError."""
        errors = []
        orders_tree.find_node("missing").assert_ = lambda t, ctx, req, v, resp, err: errors.append(err)
        orders_tree.run_path(recorder, ["orders", "get", "missing"])

        assert isinstance(errors[0], RunnerPanicError)
        assert "o-404" in str(errors[0])
        assert not recorder.failed


class TestRunNode:
    """Test running by node reference."""

    def test_run_original_node(self, recorder):
        """The caller's node runs the internal copy."""
        calls = []
        leaf = Node(id="leaf", run=lambda *a: calls.append("run"), assert_=lambda *a: None)
        tree = build(Node(id="root"), [leaf])
        tree.run_node(recorder, leaf)

        assert calls == ["run"]

    def test_run_foreign_node_reports(self, recorder):
        """Nodes outside the tree are reported instead of raised."""
        tree = build(Node(id="root"))
        tree.run_node(recorder, Node(id="elsewhere"))

        assert recorder.errors == ["missing parent: elsewhere"]

    def test_run_path_unknown(self, orders_tree, recorder):
        """Unknown name chains are reported, not raised."""
        orders_tree.run_path(recorder, ["orders", "delete"])
        assert recorder.errors == ["case not found: orders"]


class TestVariantsInTree:
    """Test variants combined with tree iteration."""

    def test_variants_under_case_sub_run(self, recorder):
        """Each variant becomes a sub-run below its case."""
        seen = []

        def check(t, ctx, req, variant, resp, err):
            seen.append(resp)

        root = Node(
            id="root",
            run=lambda t, ctx, req, v: v * 10,
            variants=[1, 2, 3],
            children=[Node(id="scale", assert_=check)],
        )
        build(root).run(recorder)

        assert seen == [10, 20, 30]
        assert recorder.run_names() == [
            "root",
            "root/scale",
            "root/scale/1",
            "root/scale/2",
            "root/scale/3",
        ]
