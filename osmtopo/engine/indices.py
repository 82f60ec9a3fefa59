"""Append-only entity indices — id → resolved shapely geometry.

Keys are never removed and never overwritten. A composite resolved in the
deferred pass can therefore be written immediately without invalidating
anything read earlier in the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from shapely.geometry.base import BaseGeometry

from osmtopo.engine.errors import DuplicateEntityError

logger = logging.getLogger(__name__)


class EntityIndex:
    """Insert-only mapping from entity id to geometry."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._geometries: dict[str, BaseGeometry] = {}

    def add(self, entity_id: str, geometry: BaseGeometry) -> None:
        if entity_id in self._geometries:
            raise DuplicateEntityError(self.name, entity_id)
        self._geometries[entity_id] = geometry
        logger.debug("Indexed %s %s (%s)", self.name, entity_id, geometry.geom_type)

    def get(self, entity_id: str) -> BaseGeometry | None:
        return self._geometries.get(entity_id)

    def ids(self) -> list[str]:
        return list(self._geometries)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._geometries

    def __len__(self) -> int:
        return len(self._geometries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._geometries)
