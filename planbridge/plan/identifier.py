"""Identifiers of the source test plan and their source locations.

An Identifier is the immutable record of one node in the hierarchical
plan: a container (engine, class, nested class, dynamic factory) or a
test. Its optional location is one of two closed variants, a class
location or a method location.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

CONTAINER = "container"
TEST = "test"

VALID_KINDS = frozenset({CONTAINER, TEST})


@dataclass(frozen=True)
class ClassLocation:
    """Location pointing at a whole class."""

    class_name: str


@dataclass(frozen=True)
class MethodLocation:
    """Location pointing at a method, including its parameter types."""

    class_name: str
    method_name: str
    parameter_types: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        params = self.parameter_types
        # A bare string would otherwise be split into characters
        if isinstance(params, str) or not isinstance(params, (list, tuple)):
            raise ValueError(
                f"parameter_types of {self.class_name}.{self.method_name} must be "
                f"a list of type names, got {params!r}"
            )
        if not all(isinstance(p, str) for p in params):
            raise ValueError(
                f"parameter_types of {self.class_name}.{self.method_name} must "
                f"contain only strings, got {params!r}"
            )
        # Store a tuple so instances stay hashable
        object.__setattr__(self, "parameter_types", tuple(params))


Location = Union[ClassLocation, MethodLocation]


@dataclass(frozen=True)
class Identifier:
    """A single node of the test plan.

    Attributes:
        unique_id: Globally unique, stable token for this node.
        display_name: Human-readable name.
        kind: ``"container"`` or ``"test"``.
        location: Optional class or method location.
        parent_id: Id of the parent node, or None for roots.
    """

    unique_id: str
    display_name: str
    kind: str = TEST
    location: Location | None = None
    parent_id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.unique_id, str) or not self.unique_id:
            raise ValueError("Identifier requires a non-empty unique_id")
        if not isinstance(self.display_name, str):
            raise ValueError(
                f"display_name of {self.unique_id} must be a string, "
                f"got {self.display_name!r}"
            )
        if not isinstance(self.kind, str) or self.kind not in VALID_KINDS:
            raise ValueError(
                f"Invalid kind {self.kind!r} for {self.unique_id}; "
                f"expected one of {sorted(VALID_KINDS)}"
            )

    @property
    def is_test(self) -> bool:
        return self.kind == TEST

    @property
    def is_container(self) -> bool:
        return self.kind == CONTAINER

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
