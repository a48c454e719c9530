"""Source test plan: identifiers, the plan forest and manifest loading."""

from planbridge.plan.identifier import (
    CONTAINER,
    TEST,
    ClassLocation,
    Identifier,
    Location,
    MethodLocation,
)
from planbridge.plan.manifest import dynamic_entries, load_manifest, plan_from_manifest
from planbridge.plan.plan import Plan

__all__ = [
    "CONTAINER",
    "TEST",
    "ClassLocation",
    "Identifier",
    "Location",
    "MethodLocation",
    "Plan",
    "dynamic_entries",
    "load_manifest",
    "plan_from_manifest",
]
