"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LinearRing, LineString, Polygon


def coords_array(line: LineString) -> NDArray[np.float64]:
    """Nx2 array of (x, y) positions of a line or ring."""
    return np.asarray(line.coords, dtype=np.float64)[:, :2]


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula for signed area. Positive = CCW, Negative = CW."""
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


def canonical_ring(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Closed sequence starting at its lexicographically smallest vertex, CCW."""
    body = points[:-1]
    start = int(np.lexsort((body[:, 1], body[:, 0]))[0])
    body = np.roll(body, -start, axis=0)
    ring = np.vstack([body, body[:1]])
    if signed_area(ring) < 0:
        ring = ring[::-1]
    return ring


def canonical_line(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Open sequence oriented so it starts at the smaller endpoint."""
    if tuple(points[-1]) < tuple(points[0]):
        return points[::-1]
    return points


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def bbox_contains(
    outer: tuple[float, float, float, float],
    inner: tuple[float, float, float, float],
) -> bool:
    return outer[0] <= inner[0] and outer[1] <= inner[1] and outer[2] >= inner[2] and outer[3] >= inner[3]


def is_closed_line(line: LineString, min_positions: int = 4) -> bool:
    """True when first == last and there are enough positions to form a ring."""
    coords = line.coords
    return len(coords) >= min_positions and coords[0] == coords[-1]


def ring_within(inner: LinearRing, outer: LinearRing) -> bool:
    """Test whether ``inner`` lies inside the area bounded by ``outer``.

    Bounding boxes are compared first; shapely's ``covers`` decides the rest.
    """
    outer_pts = coords_array(outer)
    inner_pts = coords_array(inner)
    if not bbox_contains(bbox(outer_pts), bbox(inner_pts)):
        return False
    return bool(Polygon(outer).covers(inner))
