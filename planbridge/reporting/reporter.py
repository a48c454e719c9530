"""YAML rendering of the legacy consumer tree.

Produces a nested report mirroring the consumer tree built by a
TreeAdapter, optionally marking which plan nodes a filter selected.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any

import yaml

from planbridge.adapter.node import ConsumerNode
from planbridge.adapter.tree import TreeAdapter


class Reporter:
    """Collects an adapter and an optional selection, renders YAML.

    The report contains a summary (node and test counts, selection size)
    and the full consumer tree with group/case names per test node.
    """

    def __init__(self, adapter: TreeAdapter) -> None:
        self.adapter = adapter
        self.selected_ids: list[str] | None = None
        self._selected_set: frozenset[str] = frozenset()
        self.selection_description: str | None = None

    def set_selection(self, ids: list[str], description: str) -> None:
        """Record the ids selected by a filter.

        Args:
            ids: Unique ids of the filtered leaves, in result order.
            description: Human-readable description of the filter.
        """
        self.selected_ids = list(ids)
        self._selected_set = frozenset(self.selected_ids)
        self.selection_description = description

    def generate_report(self) -> dict[str, Any]:
        """Generate the report data structure.

        Returns:
            Dictionary representing the full report, suitable for
            YAML serialization.
        """
        root = self.adapter.get_root_node()
        now = datetime.datetime.now(tz=datetime.timezone.utc).isoformat()

        summary: dict[str, Any] = {
            "mapped_nodes": len(self.adapter),
            "tests": root.test_count(),
        }
        report: dict[str, Any] = {
            "generated_at": now,
            "summary": summary,
        }

        if self.selected_ids is not None:
            summary["selected"] = len(self.selected_ids)
            report["selection"] = {
                "filter": self.selection_description,
                "ids": list(self.selected_ids),
            }

        report["tree"] = self._format_node(root)
        return {"report": report}

    def write_yaml(self, path: Path) -> None:
        """Write the report as a YAML file.

        Args:
            path: File path to write the YAML report to.
        """
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(
                report,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    def _format_node(self, node: ConsumerNode) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": node.display_name,
            "kind": node.kind,
            "stable_id": node.stable_id,
        }
        if node.is_test:
            entry["group"] = node.group_name
            entry["case"] = node.case_name
        else:
            entry["test_count"] = node.test_count()

        if node.stable_id in self._selected_set:
            entry["selected"] = True

        if node.children:
            entry["children"] = [self._format_node(child) for child in node.children]
        return entry
