"""Two-level naming for the legacy class/method model.

The legacy consumer knows exactly two naming levels, a group (class)
and a case (method). Plan identifiers may nest arbitrarily deep and may
or may not carry a location, so names are resolved with fallbacks:
class-bearing locations always win, otherwise the case falls back to
the display name and the group to the display name of the immediate
parent.
"""

from __future__ import annotations

from planbridge.plan.identifier import ClassLocation, Identifier, MethodLocation
from planbridge.plan.plan import Plan

# Group name for identifiers with neither a location nor a parent
UNROOTED = "<unrooted>"


def case_name(identifier: Identifier) -> str:
    """Resolve the legacy method-level name of an identifier."""
    match identifier.location:
        case ClassLocation(class_name=class_name):
            return class_name
        case MethodLocation(method_name=method_name, parameter_types=()):
            return method_name
        case MethodLocation(method_name=method_name, parameter_types=params):
            return f"{method_name}({','.join(params)})"
        case None:
            return identifier.display_name
        case other:
            raise TypeError(f"Unsupported location for {identifier.unique_id}: {other!r}")


def group_name(identifier: Identifier, plan: Plan) -> str:
    """Resolve the legacy class-level name of an identifier.

    Only the immediate parent is consulted when the identifier has no
    location; the search never continues further up the tree.
    """
    match identifier.location:
        case ClassLocation(class_name=class_name) | MethodLocation(class_name=class_name):
            return class_name
        case None:
            parent = plan.parent(identifier.unique_id)
            return parent.display_name if parent is not None else UNROOTED
        case other:
            raise TypeError(f"Unsupported location for {identifier.unique_id}: {other!r}")


def resolve(identifier: Identifier, plan: Plan) -> tuple[str, str]:
    """Return the ``(group_name, case_name)`` pair for an identifier."""
    return group_name(identifier, plan), case_name(identifier)
