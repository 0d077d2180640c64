"""
Tests for NodePath queries.

Focus Areas:
1. Nearest-wins runner and variant resolution
2. Assertion chain collection with the inheritance cutoff
"""

from casetree import Node, NodePath


def make_assert(name, calls):
    def hook(t, ctx, req, variant, resp, err):
        calls.append(name)

    hook.__name__ = f"assert_{name}"
    return hook


def path_of(*nodes):
    return NodePath(tuple(nodes))


class TestPathBasics:
    """Test sequence behavior of NodePath."""

    def test_names_and_leaf(self):
        """names() is the root-to-leaf ID chain."""
        path = path_of(Node(id="root"), Node(id="mid"), Node(id="leaf"))

        assert path.names() == ["root", "mid", "leaf"]
        assert path.leaf.id == "leaf"
        assert len(path) == 3
        assert str(path) == "root/mid/leaf"

    def test_parent_and_append(self):
        """parent() drops the leaf, append() returns a new path."""
        root, child = Node(id="root"), Node(id="child")
        path = path_of(root)
        extended = path.append(child)

        assert path.names() == ["root"]
        assert extended.names() == ["root", "child"]
        assert extended.parent().names() == ["root"]
        assert NodePath().parent().names() == []

    def test_empty_path(self):
        """An empty path has no leaf and is falsy."""
        path = NodePath()
        assert path.leaf is None
        assert not path


class TestNearestWins:
    """Test leaf-to-root resolution of runner and variants."""

    def test_runner_closest_to_leaf(self):
        """The mid-level runner wins over the root runner."""

        def root_run(t, ctx, req, v):
            return "root"

        def mid_run(t, ctx, req, v):
            return "mid"

        path = path_of(Node(id="root", run=root_run), Node(id="mid", run=mid_run), Node(id="leaf"))
        assert path.runner() is mid_run

    def test_no_runner(self):
        """Paths without any runner resolve to None."""
        assert path_of(Node(id="root"), Node(id="leaf")).runner() is None

    def test_variants_closest_to_leaf(self):
        """Empty variant lists are skipped."""
        path = path_of(
            Node(id="root", variants=[1, 2]),
            Node(id="mid", variants=["a"]),
            Node(id="leaf"),
        )
        assert path.variants() == ["a"]
        assert path_of(Node(id="root")).variants() == []


class TestAssertChain:
    """Test assertion collection order and cutoff."""

    def test_all_inherited_run_root_first(self):
        """Ancestor assertions run before descendant assertions."""
        calls = []
        path = path_of(
            Node(id="a", assert_=make_assert("A", calls)),
            Node(id="b", assert_=make_assert("B", calls)),
            Node(id="c", assert_=make_assert("C", calls)),
        )
        for hook in path.asserts():
            hook(None, None, None, None, None, None)

        assert calls == ["A", "B", "C"]

    def test_cutoff_keeps_non_inheriting_node_assert(self):
        """A non-inheriting node keeps its own assertion but drops its ancestors'."""
        calls = []
        path = path_of(
            Node(id="a", assert_=make_assert("A", calls)),
            Node(id="b", assert_=make_assert("B", calls), inherit_assert=False),
            Node(id="c", assert_=make_assert("C", calls)),
        )
        for hook in path.asserts():
            hook(None, None, None, None, None, None)

        assert calls == ["B", "C"]

    def test_cutoff_on_leaf(self):
        """A non-inheriting leaf only runs its own assertion."""
        calls = []
        path = path_of(
            Node(id="a", assert_=make_assert("A", calls)),
            Node(id="b", assert_=make_assert("B", calls), inherit_assert=False),
        )
        assert [hook.__name__ for hook in path.asserts()] == ["assert_B"]

    def test_assert_self_always_last(self):
        """assert_self of the leaf runs after the chain, even with the cutoff."""
        calls = []
        path = path_of(
            Node(id="a", assert_=make_assert("A", calls)),
            Node(
                id="b",
                assert_=make_assert("B", calls),
                assert_self=make_assert("self", calls),
                inherit_assert=False,
            ),
        )
        assert [hook.__name__ for hook in path.asserts()] == ["assert_B", "assert_self"]

    def test_assert_self_of_ancestor_ignored(self):
        """Only the leaf's assert_self participates."""
        calls = []
        path = path_of(
            Node(id="a", assert_self=make_assert("self_a", calls)),
            Node(id="b", assert_=make_assert("B", calls)),
        )
        assert [hook.__name__ for hook in path.asserts()] == ["assert_B"]
