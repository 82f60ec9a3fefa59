"""PathBuilder — turn an ordered list of point ids into a point, line, ring or area.

Closed paths are filled areas unless their tags mark them as boundary
linework (barriers, roads), in which case they stay a bare ring.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from shapely.geometry import LinearRing, LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from osmtopo.engine.config import ResolverConfig
from osmtopo.engine.context import PathEntity
from osmtopo.engine.errors import MissingReferenceError, TopologyError
from osmtopo.engine.indices import EntityIndex

logger = logging.getLogger(__name__)


def build_path_geometry(
    path_id: str,
    member_point_ids: Sequence[str],
    tags: Mapping[str, str],
    point_index: EntityIndex,
    config: ResolverConfig | None = None,
) -> BaseGeometry:
    """Resolve point ids in order and classify the resulting shape.

    Raises MissingReferenceError if any id is absent from ``point_index``.
    """
    config = config or ResolverConfig()
    if not member_point_ids:
        raise TopologyError(f"{path_id}: path has no point references")

    coords: list[tuple[float, float]] = []
    for ref in member_point_ids:
        point = point_index.get(ref)
        if point is None:
            raise MissingReferenceError(path_id, ref)
        coords.append((point.x, point.y))

    if len(coords) >= config.min_ring_nodes and coords[0] == coords[-1]:
        ring = LinearRing(coords)
        if any(key in tags for key in config.boundary_tag_keys):
            return ring
        return Polygon(ring)
    if len(coords) > 1:
        return LineString(coords)
    return Point(coords[0])


class PathBuilder:
    """Builds path geometries against a shared point index."""

    def __init__(self, point_index: EntityIndex, config: ResolverConfig | None = None) -> None:
        self.point_index = point_index
        self.config = config or ResolverConfig()

    def build(self, path: PathEntity) -> BaseGeometry:
        return build_path_geometry(path.id, path.member_point_ids, path.tags, self.point_index, self.config)
