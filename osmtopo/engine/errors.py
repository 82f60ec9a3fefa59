"""Exceptions raised while reconstructing entity geometries."""

from __future__ import annotations


class TopologyError(Exception):
    """Base class for per-entity reconstruction failures."""


class MissingReferenceError(TopologyError):
    """A path references a point that was never indexed."""

    def __init__(self, entity_id: str, ref: str) -> None:
        super().__init__(f"{entity_id}: missing point reference {ref}")
        self.entity_id = entity_id
        self.ref = ref


class DuplicateEntityError(TopologyError, ValueError):
    """An append-only index was asked to overwrite an existing key."""

    def __init__(self, index_name: str, entity_id: str) -> None:
        super().__init__(f"Duplicate {index_name} id: {entity_id}")
        self.index_name = index_name
        self.entity_id = entity_id
