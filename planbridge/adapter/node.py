"""Consumer-side nodes of the legacy two-level tree.

A ConsumerNode is either a suite (mirrors a container, or the synthetic
root) or a test (mirrors a test identifier, named by group and case).
Mapped nodes compare and hash by their stable id, which is the
originating identifier's unique id. The synthetic root has no stable id
and compares by identity.
"""

from __future__ import annotations

from typing import Iterator

SUITE = "suite"
TEST = "test"


class ConsumerNode:
    """A node of the legacy tree.

    Suites carry only a display name; tests carry a group name and a
    case name. Children only ever grow, in insertion order.
    """

    def __init__(
        self,
        kind: str,
        stable_id: str | None,
        group_name: str,
        case_name: str | None = None,
    ) -> None:
        if kind not in (SUITE, TEST):
            raise ValueError(f"Invalid consumer node kind: {kind!r}")
        if kind == TEST and case_name is None:
            raise ValueError(f"Test node {stable_id} requires a case name")
        self.kind = kind
        self.stable_id = stable_id
        self.group_name = group_name
        self.case_name = case_name if kind == TEST else None
        self.parent: ConsumerNode | None = None
        self._children: list[ConsumerNode] = []

    @classmethod
    def suite(cls, display_name: str, stable_id: str | None = None) -> ConsumerNode:
        """Create a suite node; without a stable id it compares by identity."""
        return cls(SUITE, stable_id, display_name)

    @classmethod
    def test(cls, group_name: str, case_name: str, stable_id: str) -> ConsumerNode:
        """Create a test node."""
        return cls(TEST, stable_id, group_name, case_name)

    @property
    def is_test(self) -> bool:
        return self.kind == TEST

    @property
    def is_suite(self) -> bool:
        return self.kind == SUITE

    @property
    def display_name(self) -> str:
        """Legacy display form: ``case(group)`` for tests, the name for suites."""
        if self.kind == SUITE:
            return self.group_name
        return f"{self.case_name}({self.group_name})"

    @property
    def children(self) -> tuple[ConsumerNode, ...]:
        return tuple(self._children)

    def add_child(self, child: ConsumerNode) -> None:
        """Append a child as the last one."""
        child.parent = self
        self._children.append(child)

    def iter_ancestors(self) -> Iterator[ConsumerNode]:
        """Yield the parent, grandparent and so on up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter_subtree(self) -> Iterator[ConsumerNode]:
        """Yield this node and every node below it in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def test_count(self) -> int:
        """Number of test nodes in this subtree, including this node."""
        return sum(1 for node in self.iter_subtree() if node.is_test)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConsumerNode):
            return NotImplemented
        if self.stable_id is None or other.stable_id is None:
            return self is other
        return self.stable_id == other.stable_id

    def __hash__(self) -> int:
        if self.stable_id is None:
            return id(self)
        return hash(self.stable_id)

    def __repr__(self) -> str:
        return f"ConsumerNode({self.kind}, {self.display_name!r}, id={self.stable_id!r})"
