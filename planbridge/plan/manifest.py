"""Build a Plan from the JSON manifest produced by test discovery.

The manifest carries the discovered forest under ``plan`` as nested
entries, and the nodes that only surface while tests execute under
``dynamic`` as flat entries naming their parent::

    {
      "plan": [{"id": ..., "display_name": ..., "kind": "container",
                "location": {"class_name": ...}, "children": [...]}],
      "dynamic": [{"parent_id": ..., "id": ..., "display_name": ...}]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from planbridge.plan.identifier import (
    CONTAINER,
    TEST,
    ClassLocation,
    Identifier,
    Location,
    MethodLocation,
)
from planbridge.plan.plan import Plan


def _require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list, got {value!r}")
    return value


def location_from_dict(data: dict[str, Any] | None) -> Location | None:
    """Parse a manifest location entry.

    Returns None when the entry is absent or carries no class name, a
    MethodLocation when ``method_name`` is present, else a ClassLocation.

    Raises:
        ValueError: If the entry or one of its fields has the wrong type.
    """
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Manifest location must be an object, got {data!r}")
    class_name = data.get("class_name", "")
    if not isinstance(class_name, str):
        raise ValueError(f"Location class_name must be a string: {data!r}")
    if not class_name:
        return None
    method_name = data.get("method_name")
    if method_name is not None and not isinstance(method_name, str):
        raise ValueError(f"Location method_name must be a string: {data!r}")
    if method_name:
        parameter_types = data.get("parameter_types", [])
        if not isinstance(parameter_types, list) or not all(
            isinstance(p, str) for p in parameter_types
        ):
            raise ValueError(
                f"Location parameter_types must be a list of strings: {data!r}"
            )
        return MethodLocation(
            class_name=class_name,
            method_name=method_name,
            parameter_types=tuple(parameter_types),
        )
    return ClassLocation(class_name=class_name)


def identifier_from_dict(
    data: dict[str, Any], parent_id: str | None = None
) -> Identifier:
    """Parse a single manifest entry into an Identifier.

    Args:
        data: Entry dict with at least an ``id`` key.
        parent_id: Parent id for nested entries; flat entries may carry
            their own ``parent_id`` key instead.

    Returns:
        The parsed Identifier.

    Raises:
        ValueError: If the entry is not an object, has no id, or has a
            field of the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Manifest entry must be an object, got {data!r}")
    unique_id = data.get("id", "")
    if not unique_id:
        raise ValueError(f"Manifest entry is missing 'id': {data!r}")
    if not isinstance(unique_id, str):
        raise ValueError(f"Manifest entry id must be a string: {data!r}")

    children = _require_list(data.get("children", []), f"Children of {unique_id}")
    kind = data.get("kind")
    if kind is None:
        kind = CONTAINER if children else TEST

    if parent_id is None:
        parent_id = data.get("parent_id")

    try:
        location = location_from_dict(data.get("location"))
    except ValueError as e:
        raise ValueError(f"Manifest entry {unique_id}: {e}") from e

    return Identifier(
        unique_id=unique_id,
        display_name=data.get("display_name", unique_id),
        kind=kind,
        location=location,
        parent_id=parent_id,
    )


def _walk_entries(
    entries: list[dict[str, Any]], parent_id: str | None
) -> Iterator[Identifier]:
    for entry in entries:
        identifier = identifier_from_dict(entry, parent_id)
        yield identifier
        yield from _walk_entries(entry.get("children", []), identifier.unique_id)


def plan_from_manifest(manifest: dict[str, Any]) -> Plan:
    """Construct a Plan from a parsed manifest.

    Entries are added in depth-first pre-order so that every parent is
    present before its children.

    Raises:
        ValueError: If an entry is malformed.
        StructuralError: If ids repeat.
    """
    entries = _require_list(manifest.get("plan", []), "Manifest 'plan'")
    return Plan.from_identifiers(_walk_entries(entries, None))


def dynamic_entries(manifest: dict[str, Any]) -> Iterator[tuple[Identifier, str]]:
    """Yield ``(identifier, parent_id)`` pairs for the manifest's dynamic nodes.

    Raises:
        ValueError: If an entry is not an object or has no parent_id.
    """
    for entry in _require_list(manifest.get("dynamic", []), "Manifest 'dynamic'"):
        if not isinstance(entry, dict):
            raise ValueError(f"Dynamic entry must be an object, got {entry!r}")
        parent_id = entry.get("parent_id")
        if not parent_id:
            raise ValueError(
                f"Dynamic entry {entry.get('id', '?')} is missing 'parent_id'"
            )
        if not isinstance(parent_id, str):
            raise ValueError(f"Dynamic entry parent_id must be a string: {entry!r}")
        yield identifier_from_dict(entry), parent_id


def load_manifest(path: Path) -> dict[str, Any]:
    """Read a manifest JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Manifest {path} must contain a JSON object")
    return data
