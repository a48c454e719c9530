"""Stock legacy filter predicates over ConsumerNodes.

Each factory returns a side-effect-free callable usable with
``TreeAdapter.filtered_leaves``. Predicates carry a ``description``
attribute so callers can report what was selected.
"""

from __future__ import annotations

import fnmatch
from typing import Iterable

from planbridge.adapter.node import ConsumerNode
from planbridge.adapter.tree import NodePredicate


def _described(predicate: NodePredicate, description: str) -> NodePredicate:
    predicate.description = description  # type: ignore[attr-defined]
    return predicate


def describe(predicate: NodePredicate) -> str:
    """Human-readable description of a predicate."""
    return getattr(predicate, "description", getattr(predicate, "__name__", repr(predicate)))


def match_node(target: ConsumerNode) -> NodePredicate:
    """Select one node: true for the target and every suite containing it.

    Ancestors are collected once; nodes never move, so the set stays valid
    as the tree grows.
    """
    selected = {target, *target.iter_ancestors()}

    def predicate(node: ConsumerNode) -> bool:
        return node in selected

    return _described(predicate, f"Node {target.display_name}")


def match_group(pattern: str) -> NodePredicate:
    """Shell-style match on the group name of test nodes and suites."""

    def predicate(node: ConsumerNode) -> bool:
        return fnmatch.fnmatchcase(node.group_name, pattern)

    return _described(predicate, f"group matches {pattern}")


def match_case(pattern: str) -> NodePredicate:
    """Shell-style match on the case name; suites never match."""

    def predicate(node: ConsumerNode) -> bool:
        return node.is_test and fnmatch.fnmatchcase(node.case_name, pattern)

    return _described(predicate, f"case matches {pattern}")


def match_ids(ids: Iterable[str]) -> NodePredicate:
    """True for nodes whose stable id is in ``ids``."""
    wanted = frozenset(ids)

    def predicate(node: ConsumerNode) -> bool:
        return node.stable_id in wanted

    return _described(predicate, f"id in {sorted(wanted)}")


def all_of(*predicates: NodePredicate) -> NodePredicate:
    """True when every predicate holds (vacuously true with none)."""

    def predicate(node: ConsumerNode) -> bool:
        return all(p(node) for p in predicates)

    return _described(predicate, " and ".join(describe(p) for p in predicates) or "all")


def any_of(*predicates: NodePredicate) -> NodePredicate:
    """True when at least one predicate holds."""

    def predicate(node: ConsumerNode) -> bool:
        return any(p(node) for p in predicates)

    return _described(predicate, " or ".join(describe(p) for p in predicates) or "none")


def negate(inner: NodePredicate) -> NodePredicate:
    """Invert a predicate."""

    def predicate(node: ConsumerNode) -> bool:
        return not inner(node)

    return _described(predicate, f"not ({describe(inner)})")
