"""Unit tests for the stock legacy filter predicates."""

from __future__ import annotations

from planbridge.adapter.filters import (
    all_of,
    any_of,
    describe,
    match_case,
    match_group,
    match_ids,
    match_node,
    negate,
)
from planbridge.adapter.node import ConsumerNode
from planbridge.adapter.tree import TreeAdapter
from planbridge.plan.identifier import CONTAINER, ClassLocation, Identifier, MethodLocation
from planbridge.plan.plan import Plan


def _adapter() -> TreeAdapter:
    """Suite > Outer > (testOuter, testOther(int), Inner > testInner)."""
    plan = Plan.from_identifiers([
        Identifier("suite", "Suite", kind=CONTAINER),
        Identifier("outer", "Outer", kind=CONTAINER,
                   location=ClassLocation("com.example.Outer"), parent_id="suite"),
        Identifier("testOuter", "testOuter()",
                   location=MethodLocation("com.example.Outer", "testOuter"), parent_id="outer"),
        Identifier("testOther", "testOther(int)",
                   location=MethodLocation("com.example.Outer", "testOther", ("int",)),
                   parent_id="outer"),
        Identifier("inner", "Inner", kind=CONTAINER,
                   location=ClassLocation("com.example.Outer$Inner"), parent_id="outer"),
        Identifier("testInner", "testInner()",
                   location=MethodLocation("com.example.Outer$Inner", "testInner"), parent_id="inner"),
    ])
    return TreeAdapter(plan, "root")


def _leaves(adapter, predicate):
    return [i.unique_id for i in adapter.filtered_leaves(predicate)]


class TestMatchNode:
    """Tests for single-node selection."""

    def test_matches_target_and_containing_suites(self):
        """The target and every suite containing it match."""
        adapter = _adapter()
        target = adapter.get_node_for("testInner")
        predicate = match_node(target)
        assert predicate(target)
        assert predicate(adapter.get_node_for("inner"))
        assert predicate(adapter.get_node_for("outer"))
        assert predicate(adapter.get_root_node())
        assert not predicate(adapter.get_node_for("testOuter"))

    def test_projects_to_target_only(self):
        """Leaf projection reduces the matching chain to the target."""
        adapter = _adapter()
        assert _leaves(adapter, match_node(adapter.get_node_for("testInner"))) == ["testInner"]

    def test_suite_target(self):
        """Selecting a suite keeps the suite itself as the leaf."""
        adapter = _adapter()
        assert _leaves(adapter, match_node(adapter.get_node_for("inner"))) == ["inner"]

    def test_dynamic_target(self):
        """A dynamically inserted target is selected through its new ancestors."""
        adapter = _adapter()
        adapter.insert_dynamic(Identifier("dyn", "dyn()", parent_id="inner"), "inner")
        predicate = match_node(adapter.get_node_for("dyn"))
        assert predicate(adapter.get_node_for("inner"))
        assert predicate(adapter.get_root_node())
        adapter.insert_dynamic(Identifier("late", "late()", parent_id="outer"), "outer")
        assert not predicate(adapter.get_node_for("late"))
        assert _leaves(adapter, predicate) == ["dyn"]

    def test_detached_target(self):
        """A node outside the tree matches only itself."""
        adapter = _adapter()
        stray = ConsumerNode.test("G", "stray", "stray")
        predicate = match_node(stray)
        assert predicate(stray)
        assert not predicate(adapter.get_root_node())
        assert _leaves(adapter, predicate) == []


class TestNamePatterns:
    """Tests for group and case pattern matching."""

    def test_match_group(self):
        """Group patterns match suites and tests alike."""
        adapter = _adapter()
        assert _leaves(adapter, match_group("com.example.Outer$*")) == ["testInner"]

    def test_match_group_exact(self):
        """An exact group picks the class's own tests."""
        adapter = _adapter()
        assert _leaves(adapter, match_group("com.example.Outer")) == ["testOuter", "testOther"]

    def test_match_case(self):
        """Case patterns match resolved case names, including parameters."""
        adapter = _adapter()
        assert _leaves(adapter, match_case("testO*")) == ["testOuter", "testOther"]
        assert _leaves(adapter, match_case("*(int)")) == ["testOther"]

    def test_match_case_never_matches_suites(self):
        """Suites have no case name."""
        adapter = _adapter()
        assert not match_case("*")(adapter.get_node_for("outer"))


class TestMatchIds:
    """Tests for id-set selection."""

    def test_ids(self):
        """Nodes are matched by stable id."""
        adapter = _adapter()
        assert _leaves(adapter, match_ids(["outer", "testInner"])) == ["testInner"]


class TestCombinators:
    """Tests for predicate combinators and descriptions."""

    def test_all_of(self):
        """all_of requires every predicate."""
        adapter = _adapter()
        predicate = all_of(match_group("com.example.Outer"), match_case("*Other*"))
        assert _leaves(adapter, predicate) == ["testOther"]

    def test_any_of(self):
        """any_of requires one predicate."""
        adapter = _adapter()
        predicate = any_of(match_ids(["testOuter"]), match_ids(["testInner"]))
        assert _leaves(adapter, predicate) == ["testOuter", "testInner"]

    def test_negate(self):
        """negate inverts; here every remaining leaf is kept."""
        adapter = _adapter()
        predicate = negate(match_group("com.example.Outer"))
        assert _leaves(adapter, predicate) == ["testInner"]

    def test_descriptions(self):
        """Predicates describe themselves."""
        predicate = all_of(match_group("a*"), negate(match_case("b")))
        assert describe(predicate) == "group matches a* and not (case matches b)"
        assert describe(all_of()) == "all"

    def test_describe_plain_callable(self):
        """Plain functions fall back to their name."""
        def only_tests(node):
            return node.is_test
        assert describe(only_tests) == "only_tests"
