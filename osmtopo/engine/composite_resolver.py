"""CompositeResolver — build a composite's geometry from its members.

Dispatch on the composite's declared kind:

  line collections  → MultiLineString of member paths (missing members skipped)
  area collections  → Polygon / MultiPolygon from outer and inner rings
  anything else     → the single member, or a GeometryCollection

A composite whose members are not all indexed yet is deferred once; on the
retry it is either resolved or reported unresolved for good.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity

from osmtopo.engine.config import ResolverConfig
from osmtopo.engine.context import CompositeEntity, MemberRef
from osmtopo.engine.deferred import DeferredQueue
from osmtopo.engine.indices import EntityIndex
from osmtopo.engine.ring_assembler import merge_fragments, split_rings
from osmtopo.utils.geometry import is_closed_line, ring_within

logger = logging.getLogger(__name__)

Status = Literal["resolved", "deferred", "unresolved"]


@dataclass(frozen=True)
class ResolveOutcome:
    status: Status
    geometry: BaseGeometry | None = None
    valid: bool = True
    reason: str = ""

    @classmethod
    def resolved(cls, geometry: BaseGeometry, valid: bool = True) -> ResolveOutcome:
        return cls(status="resolved", geometry=geometry, valid=valid)

    @classmethod
    def deferred(cls, reason: str = "") -> ResolveOutcome:
        return cls(status="deferred", reason=reason)

    @classmethod
    def unresolved(cls, reason: str) -> ResolveOutcome:
        return cls(status="unresolved", reason=reason)

    @property
    def is_resolved(self) -> bool:
        return self.status == "resolved"

    @property
    def is_deferred(self) -> bool:
        return self.status == "deferred"


class CompositeResolver:
    """Resolves composites against the point, path and composite indices."""

    def __init__(
        self,
        point_index: EntityIndex,
        path_index: EntityIndex,
        composite_index: EntityIndex,
        deferred: DeferredQueue,
        config: ResolverConfig | None = None,
    ) -> None:
        self.point_index = point_index
        self.path_index = path_index
        self.composite_index = composite_index
        self.deferred = deferred
        self.config = config or ResolverConfig()

    def resolve(self, composite: CompositeEntity) -> ResolveOutcome:
        kind = composite.tags.get(self.config.kind_tag)
        geom: BaseGeometry | None = None

        if self.config.is_line_collection(kind):
            geom = self._resolve_lines(composite)
        elif self.config.is_area_collection(kind):
            geom = self._resolve_areas(composite)

        if geom is None:
            outcome = self._resolve_members(composite)
            if not outcome.is_resolved:
                return outcome
            geom = outcome.geometry

        return ResolveOutcome.resolved(geom, valid=self._check_validity(composite.id, geom))

    # ------------------------------------------------------------------
    # Member lookup
    # ------------------------------------------------------------------

    def _lookup(self, member: MemberRef) -> BaseGeometry | None:
        match member.type:
            case "way":
                return self.path_index.get(member.ref)
            case "node":
                return self.point_index.get(member.ref)
            case "relation":
                return self.composite_index.get(member.ref)
        for index in (self.path_index, self.point_index, self.composite_index):
            geom = index.get(member.ref)
            if geom is not None:
                return geom
        return None

    def _path_members(self, composite: CompositeEntity) -> list[tuple[MemberRef, BaseGeometry]]:
        """Members that name an indexed path. Anything else is skipped silently."""
        found = []
        for member in composite.members:
            if member.type not in (None, "way"):
                continue
            geom = self.path_index.get(member.ref)
            if geom is None:
                logger.debug("Composite %s: path member %s not indexed", composite.id, member.ref)
                continue
            found.append((member, geom))
        return found

    # ------------------------------------------------------------------
    # Line collections
    # ------------------------------------------------------------------

    def _resolve_lines(self, composite: CompositeEntity) -> MultiLineString | None:
        lines: list[LineString] = []
        for _, geom in self._path_members(composite):
            match geom:
                case Polygon():
                    lines.append(LineString(geom.exterior.coords))
                case LineString():
                    lines.append(LineString(geom.coords))
        if not lines:
            return None
        return MultiLineString(lines)

    # ------------------------------------------------------------------
    # Area collections
    # ------------------------------------------------------------------

    def _resolve_areas(self, composite: CompositeEntity) -> Polygon | MultiPolygon | None:
        outer_rings: list[LinearRing] = []
        inner_rings: list[LinearRing] = []
        outer_ways: list[LineString] = []
        inner_ways: list[LineString] = []

        for member, geom in self._path_members(composite):
            is_inner = (member.role or "").lower() == self.config.inner_role
            rings = inner_rings if is_inner else outer_rings
            ways = inner_ways if is_inner else outer_ways
            match geom:
                case Polygon():
                    rings.append(LinearRing(geom.exterior.coords))
                case LinearRing():
                    rings.append(geom)
                case LineString() if is_closed_line(geom, self.config.min_ring_nodes):
                    rings.append(LinearRing(geom.coords))
                case LineString():
                    ways.append(geom)

        for ways, rings, label in ((outer_ways, outer_rings, "outer"), (inner_ways, inner_rings, "inner")):
            if not ways:
                continue
            merged_rings, leftovers = split_rings(merge_fragments(ways, self.config.min_ring_nodes))
            rings.extend(merged_rings)
            if leftovers:
                logger.debug(
                    "Composite %s: %d %s fragment(s) did not close into a ring",
                    composite.id,
                    len(leftovers),
                    label,
                )

        if not outer_rings:
            return None
        if len(outer_rings) == 1:
            return Polygon(outer_rings[0], holes=inner_rings)

        areas = []
        for shell in outer_rings:
            holes = [hole for hole in inner_rings if ring_within(hole, shell)]
            areas.append(Polygon(shell, holes=holes))
        return MultiPolygon(areas)

    # ------------------------------------------------------------------
    # Everything else
    # ------------------------------------------------------------------

    def _resolve_members(self, composite: CompositeEntity) -> ResolveOutcome:
        if not composite.members:
            return ResolveOutcome.unresolved("no members")

        found: list[BaseGeometry] = []
        missing: list[str] = []
        for member in composite.members:
            geom = self._lookup(member)
            if geom is None:
                missing.append(member.ref)
            else:
                found.append(geom)

        if missing:
            reason = f"missing members: {', '.join(missing)}"
            if not self.deferred.was_queued(composite.id):
                return ResolveOutcome.deferred(reason)
            return ResolveOutcome.unresolved(reason)

        if len(found) == 1:
            return ResolveOutcome.resolved(found[0])
        return ResolveOutcome.resolved(GeometryCollection(found))

    def _check_validity(self, composite_id: str, geom: BaseGeometry) -> bool:
        if geom.is_valid:
            return True
        logger.warning("Composite %s extracted but invalid: %s", composite_id, explain_validity(geom))
        return False
