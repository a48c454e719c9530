"""Legacy tree adapter: consumer nodes, naming, filters and the plan mirror."""

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
from planbridge.adapter.naming import UNROOTED, case_name, group_name, resolve
from planbridge.adapter.node import ConsumerNode
from planbridge.adapter.tree import TreeAdapter

__all__ = [
    "UNROOTED",
    "ConsumerNode",
    "TreeAdapter",
    "all_of",
    "any_of",
    "case_name",
    "describe",
    "group_name",
    "match_case",
    "match_group",
    "match_ids",
    "match_node",
    "negate",
    "resolve",
]
