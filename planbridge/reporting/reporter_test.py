"""Unit tests for the YAML tree reporter."""

from __future__ import annotations

import tempfile
from pathlib import Path

import yaml

from planbridge.adapter.tree import TreeAdapter
from planbridge.plan.identifier import CONTAINER, ClassLocation, Identifier, MethodLocation
from planbridge.plan.plan import Plan
from planbridge.reporting.reporter import Reporter


def _adapter() -> TreeAdapter:
    plan = Plan.from_identifiers([
        Identifier("outer", "Outer", kind=CONTAINER, location=ClassLocation("pkg.Outer")),
        Identifier("t1", "t1()", location=MethodLocation("pkg.Outer", "t1"), parent_id="outer"),
        Identifier("t2", "t2(int)", location=MethodLocation("pkg.Outer", "t2", ("int",)),
                   parent_id="outer"),
    ])
    return TreeAdapter(plan, "AllTests")


class TestReporter:
    """Tests for report generation."""

    def test_tree_structure(self):
        """The report mirrors the consumer tree."""
        report = Reporter(_adapter()).generate_report()["report"]
        tree = report["tree"]
        assert tree["name"] == "AllTests"
        assert tree["kind"] == "suite"
        assert tree["test_count"] == 2
        outer = tree["children"][0]
        assert outer["stable_id"] == "outer"
        assert [c["name"] for c in outer["children"]] == ["t1(pkg.Outer)", "t2(int)(pkg.Outer)"]
        assert outer["children"][1]["group"] == "pkg.Outer"
        assert outer["children"][1]["case"] == "t2(int)"
        assert "children" not in outer["children"][0]

    def test_summary(self):
        """The summary counts mapped nodes and tests."""
        report = Reporter(_adapter()).generate_report()["report"]
        assert report["summary"] == {"mapped_nodes": 3, "tests": 2}
        assert "generated_at" in report
        assert "selection" not in report

    def test_selection_marked(self):
        """Selected ids are listed and flagged in the tree."""
        reporter = Reporter(_adapter())
        reporter.set_selection(["t2"], "case matches t2*")
        report = reporter.generate_report()["report"]
        assert report["summary"]["selected"] == 1
        assert report["selection"] == {"filter": "case matches t2*", "ids": ["t2"]}
        children = report["tree"]["children"][0]["children"]
        assert children[1]["selected"] is True
        assert "selected" not in children[0]

    def test_yaml_output_creates_parent_dirs(self):
        """write_yaml creates parent directories and writes valid YAML."""
        reporter = Reporter(_adapter())
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "subdir" / "nested" / "tree.yaml"
            reporter.write_yaml(path)
            loaded = yaml.safe_load(path.read_text())
            assert loaded["report"]["tree"]["name"] == "AllTests"
            assert list(loaded["report"].keys()) == ["generated_at", "summary", "tree"]

    def test_root_not_selected_by_colliding_id(self):
        """A selected plan id equal to the root label flags only the mapped node."""
        plan = Plan.from_identifiers([
            Identifier("AllTests", "AllTests", kind=CONTAINER),
            Identifier("t", "t()", location=MethodLocation("pkg.C", "t"), parent_id="AllTests"),
        ])
        reporter = Reporter(TreeAdapter(plan, "AllTests"))
        reporter.set_selection(["AllTests"], "id AllTests")
        tree = reporter.generate_report()["report"]["tree"]
        assert tree["stable_id"] is None
        assert "selected" not in tree
        assert tree["children"][0]["selected"] is True

    def test_selection_order_kept(self):
        """Selected ids keep their result order in the report."""
        reporter = Reporter(_adapter())
        reporter.set_selection(["t2", "t1"], "any")
        report = reporter.generate_report()["report"]
        assert report["selection"]["ids"] == ["t2", "t1"]
        assert all(c["selected"] for c in report["tree"]["children"][0]["children"])
