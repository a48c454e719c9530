"""Errors raised when a collaborator breaks the plan's structural contract."""

from __future__ import annotations


class StructuralError(ValueError):
    """A plan or tree mutation would violate the forest invariants.

    Raised for duplicate ids, unknown parents on ``Plan.add`` and
    unmapped parents on ``TreeAdapter.insert_dynamic``. The offending
    call never leaves partial state behind.
    """

    def __init__(self, message: str, unique_id: str | None = None) -> None:
        super().__init__(message)
        self.unique_id: str | None = unique_id
