"""RingAssembler — merge line fragments that share endpoints into maximal polylines.

Fragments are treated as undirected edges between endpoint coordinates.
Merged polylines whose ends meet are promoted to rings. Outputs are put in
canonical form and sorted, so the result depends only on the set of input
fragments, not their order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from shapely.geometry import LinearRing, LineString, MultiLineString
from shapely.ops import linemerge

from osmtopo.utils.geometry import canonical_line, canonical_ring, coords_array, is_closed_line

logger = logging.getLogger(__name__)


def merge_fragments(fragments: Iterable[LineString], min_ring_nodes: int = 4) -> list[LineString]:
    """Merge ``fragments`` transitively.

    Results that close on themselves with at least ``min_ring_nodes`` positions
    come back as LinearRing.
    """
    lines = [LineString(f.coords) for f in fragments if f is not None and len(f.coords) >= 2]
    if not lines:
        return []

    merged = linemerge(lines)
    if isinstance(merged, MultiLineString):
        parts = list(merged.geoms)
    elif isinstance(merged, LineString) and not merged.is_empty:
        parts = [merged]
    else:
        parts = []

    out: list[LineString] = []
    for part in parts:
        pts = coords_array(part)
        if is_closed_line(part, min_ring_nodes):
            out.append(LinearRing(canonical_ring(pts)))
        else:
            out.append(LineString(canonical_line(pts)))

    out.sort(key=lambda g: g.wkb)
    logger.debug("Merged %d fragments into %d polylines", len(lines), len(out))
    return out


def split_rings(merged: Iterable[LineString]) -> tuple[list[LinearRing], list[LineString]]:
    """Partition merge output into (rings, open lines)."""
    rings: list[LinearRing] = []
    open_lines: list[LineString] = []
    for geom in merged:
        if isinstance(geom, LinearRing):
            rings.append(geom)
        else:
            open_lines.append(geom)
    return rings, open_lines
