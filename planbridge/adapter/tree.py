"""Mirror a test plan as a legacy two-level consumer tree.

Provides TreeAdapter, which builds one ConsumerNode per plan Identifier
(depth-first, declaration order), keeps the id -> node mapping, accepts
dynamically discovered nodes during execution, and projects arbitrary
legacy filter predicates back onto the plan as leaf sets.
"""

from __future__ import annotations

from typing import Callable

from planbridge.adapter.naming import case_name, group_name
from planbridge.adapter.node import ConsumerNode
from planbridge.errors import StructuralError
from planbridge.plan.identifier import Identifier
from planbridge.plan.plan import Plan

NodePredicate = Callable[[ConsumerNode], bool]


class TreeAdapter:
    """Consumer-tree mirror of a Plan.

    The mapping from identifier id to ConsumerNode only ever grows.
    Queries may run concurrently with each other but not with
    ``insert_dynamic``; callers own that discipline.
    """

    def __init__(self, plan: Plan, root_label: str) -> None:
        self.plan = plan
        self._nodes: dict[str, ConsumerNode] = {}
        self.root_node = ConsumerNode.suite(root_label)
        for identifier in plan.roots():
            self._build(identifier, self.root_node)

    def get_root_node(self) -> ConsumerNode:
        return self.root_node

    def get_node_for(self, unique_id: str) -> ConsumerNode | None:
        """Mapped node for an id, or None if nothing is mapped."""
        return self._nodes.get(unique_id)

    def identifier_for(self, node: ConsumerNode) -> Identifier | None:
        """Reverse lookup from a mapped node to its plan identifier."""
        if self._nodes.get(node.stable_id) is not node:
            return None
        return self.plan.get(node.stable_id)

    def insert_dynamic(self, identifier: Identifier, parent_id: str) -> ConsumerNode:
        """Insert a node discovered during execution.

        The node becomes the last child of its parent in both trees.
        Descendants of a dynamic node arrive through further calls.

        Args:
            identifier: The new identifier.
            parent_id: Id of an already mapped node.

        Returns:
            The newly created ConsumerNode.

        Raises:
            StructuralError: If the parent is not mapped, if the
                identifier declares a different parent, or if
                ``Plan.add`` rejects it.
        """
        parent_node = self._nodes.get(parent_id)
        if parent_node is None:
            raise StructuralError(
                f"unmapped parent: {parent_id} (for {identifier.unique_id})",
                identifier.unique_id,
            )
        if identifier.parent_id != parent_id:
            raise StructuralError(
                f"identifier {identifier.unique_id} declares parent "
                f"{identifier.parent_id!r}, not {parent_id!r}",
                identifier.unique_id,
            )
        self.plan.add(identifier)
        return self._attach(identifier, parent_node)

    def tests_in_subtree(self, ancestor_id: str) -> list[Identifier]:
        """Test identifiers below an ancestor, depth-first, without duplicates."""
        seen: set[str] = set()
        result: list[Identifier] = []
        for identifier in self.plan.descendants(ancestor_id):
            if identifier.is_test and identifier.unique_id not in seen:
                seen.add(identifier.unique_id)
                result.append(identifier)
        return result

    def filtered_leaves(self, predicate: NodePredicate) -> list[Identifier]:
        """Reduce the nodes matched by a legacy predicate to their leaves.

        Every mapped node is tested against ``predicate``. Of the matches,
        only those with no matching proper descendant are kept, so a
        container survives only when nothing beneath it matched. Results
        follow build/insertion order.
        """
        matched = [
            unique_id for unique_id, node in self._nodes.items() if predicate(node)
        ]
        candidates = set(matched)
        leaves: list[Identifier] = []
        for unique_id in matched:
            descendant_ids = {d.unique_id for d in self.plan.descendants(unique_id)}
            if descendant_ids.isdisjoint(candidates):
                leaves.append(self.plan.get(unique_id))
        return leaves

    def _build(self, identifier: Identifier, parent_node: ConsumerNode) -> None:
        node = self._attach(identifier, parent_node)
        for child in self.plan.children(identifier.unique_id):
            self._build(child, node)

    def _attach(self, identifier: Identifier, parent_node: ConsumerNode) -> ConsumerNode:
        node = self._convert(identifier)
        parent_node.add_child(node)
        self._nodes[identifier.unique_id] = node
        return node

    def _convert(self, identifier: Identifier) -> ConsumerNode:
        if identifier.is_test:
            return ConsumerNode.test(
                group_name(identifier, self.plan),
                case_name(identifier),
                identifier.unique_id,
            )
        return ConsumerNode.suite(identifier.display_name, identifier.unique_id)

    def __len__(self) -> int:
        return len(self._nodes)
