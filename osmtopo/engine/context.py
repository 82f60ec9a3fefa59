"""ParseContext — the single mutable state object for one reconstruction run.

Per-entity records → PointEntity / PathEntity / CompositeEntity
Cross-entity lookups → ParseContext.point_index / path_index / composite_index
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from osmtopo.engine.deferred import DeferredQueue
from osmtopo.engine.indices import EntityIndex

MemberType = Literal["node", "way", "relation"]


@dataclass(frozen=True)
class PointEntity:
    """A single coordinate location with tags."""

    id: str
    x: float
    y: float
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def geometry(self) -> Point:
        return Point(self.x, self.y)


@dataclass
class PathEntity:
    """An ordered chain of point references."""

    id: str
    member_point_ids: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    # Set once by the path builder; None if the path was skipped
    geometry: BaseGeometry | None = None


@dataclass(frozen=True)
class MemberRef:
    """One member of a composite. ``type`` narrows the lookup to one index."""

    ref: str
    role: str | None = None
    type: MemberType | None = None


@dataclass
class CompositeEntity:
    """An entity defined purely by references to points, paths or composites."""

    id: str
    members: list[MemberRef] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    # Write-once: stays None until resolution succeeds
    geometry: BaseGeometry | None = None


@dataclass
class ParseContext:
    """Shared state for one parse run."""

    point_index: EntityIndex = field(default_factory=lambda: EntityIndex("point"))
    path_index: EntityIndex = field(default_factory=lambda: EntityIndex("path"))
    composite_index: EntityIndex = field(default_factory=lambda: EntityIndex("composite"))

    # Entities in stream order
    points: list[PointEntity] = field(default_factory=list)
    paths: list[PathEntity] = field(default_factory=list)
    composites: dict[str, CompositeEntity] = field(default_factory=dict)

    deferred: DeferredQueue = field(default_factory=DeferredQueue)

    # --- Diagnostics: errors keyed "kind/id", the rest listed by composite id ---
    errors: dict[str, str] = field(default_factory=dict)
    invalid: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)

    # Set once the deferred queue has been drained
    finished: bool = False

    def summary(self) -> dict[str, Any]:
        return {
            "points": len(self.points),
            "paths": len(self.paths),
            "paths_resolved": len(self.path_index),
            "composites": len(self.composites),
            "composites_resolved": len(self.composite_index),
            "unresolved": len(self.unresolved),
            "invalid": len(self.invalid),
            "errors": len(self.errors),
        }
