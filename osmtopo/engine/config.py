"""Resolver configuration — tag vocabulary and ring rules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResolverConfig:
    """Controls how paths are classified and how composites are resolved."""

    # Tag carrying a composite's declared kind
    kind_tag: str = "type"
    # Kinds resolved as a MultiLineString
    line_collection_kinds: tuple[str, ...] = ("route", "multilinestring")
    # Kinds resolved as Polygon / MultiPolygon
    area_collection_kinds: tuple[str, ...] = ("multipolygon", "boundary")
    # Member role marking a hole candidate
    inner_role: str = "inner"

    # Closed paths carrying any of these keys stay linework, not filled areas
    boundary_tag_keys: tuple[str, ...] = ("barrier", "highway")
    # A closed path needs more than 3 positions to form a ring
    min_ring_nodes: int = 4

    def is_line_collection(self, kind: str | None) -> bool:
        return kind is not None and kind.lower() in self.line_collection_kinds

    def is_area_collection(self, kind: str | None) -> bool:
        return kind is not None and kind.lower() in self.area_collection_kinds
