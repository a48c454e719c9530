"""The test plan: a grow-only forest of Identifiers.

Provides Plan, which owns every Identifier and the parent/child edges
between them. Nodes can be added at any time (including while tests are
executing) but never removed.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from planbridge.errors import StructuralError
from planbridge.plan.identifier import Identifier


class Plan:
    """Forest of test plan Identifiers with ordered children.

    Supports:
    - Root, children, parent and descendant queries
    - Insertion under an existing node at any time
    - Duplicate and dangling-parent rejection
    """

    def __init__(self) -> None:
        self._identifiers: dict[str, Identifier] = {}
        self._children: dict[str, list[str]] = {}
        self._roots: list[str] = []

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[Identifier]) -> Plan:
        """Construct a Plan by adding each identifier in order.

        Args:
            identifiers: Identifiers in an order where every parent
                precedes its children.

        Returns:
            A fully populated Plan.

        Raises:
            StructuralError: If an id repeats or a parent is missing.
        """
        plan = cls()
        for identifier in identifiers:
            plan.add(identifier)
        return plan

    def add(self, identifier: Identifier) -> None:
        """Register a new identifier under its declared parent.

        Args:
            identifier: The identifier to insert.

        Raises:
            StructuralError: If the id is already present, or if the
                declared parent is not in the plan. The plan is left
                unchanged in both cases.
        """
        unique_id = identifier.unique_id
        if unique_id in self._identifiers:
            raise StructuralError(f"duplicate id: {unique_id}", unique_id)

        parent_id = identifier.parent_id
        if parent_id is not None and parent_id not in self._identifiers:
            raise StructuralError(
                f"no such parent: {parent_id} (for {unique_id})", unique_id
            )

        self._identifiers[unique_id] = identifier
        self._children[unique_id] = []
        if parent_id is None:
            self._roots.append(unique_id)
        else:
            self._children[parent_id].append(unique_id)

    def get(self, unique_id: str) -> Identifier | None:
        """Look up an identifier by id, or None if unknown."""
        return self._identifiers.get(unique_id)

    def roots(self) -> list[Identifier]:
        """Top-level identifiers in discovery order."""
        return [self._identifiers[uid] for uid in self._roots]

    def children(self, unique_id: str) -> list[Identifier]:
        """Direct children in insertion order; empty for leaves and unknown ids."""
        return [self._identifiers[uid] for uid in self._children.get(unique_id, [])]

    def parent(self, unique_id: str) -> Identifier | None:
        """Parent of the given node, or None for roots and unknown ids."""
        identifier = self._identifiers.get(unique_id)
        if identifier is None or identifier.parent_id is None:
            return None
        return self._identifiers[identifier.parent_id]

    def descendants(self, unique_id: str) -> list[Identifier]:
        """All transitive children in depth-first pre-order.

        The node itself is never included. Unknown ids yield an empty list.
        """
        result: list[Identifier] = []
        # Reversed pushes keep pre-order with an explicit stack
        stack = list(reversed(self._children.get(unique_id, [])))
        while stack:
            uid = stack.pop()
            result.append(self._identifiers[uid])
            stack.extend(reversed(self._children[uid]))
        return result

    def __contains__(self, unique_id: object) -> bool:
        return unique_id in self._identifiers

    def __len__(self) -> int:
        return len(self._identifiers)

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._identifiers.values())
