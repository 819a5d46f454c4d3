"""
Base outline extraction.

The outline is traced from the surface vertex grid: per row, the first and last
vertex whose elevation is above the no-data cutoff. The first-valid boundary is
walked top to bottom, then the last-valid boundary bottom to top, giving one
closed silhouette of the valid region. Rows without a valid vertex are skipped.

This assumes the valid region is roughly convex along each row; concave or
multi-part masks can produce a self-intersecting ring (see ``Polygon2D.is_simple``).
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from shapely.geometry import LinearRing, Polygon

from .config import DEFAULT_NO_DATA_CUTOFF
from .surfacegenerator import VertexGrid

# Column index recorded for rows without any valid vertex
NO_COLUMN = -1


@dataclass(eq=False)
class Polygon2D:
    """Ordered ``(n, 2)`` outline points; the last point connects back to the first."""

    points: np.ndarray

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def start(self) -> np.ndarray:
        return self.points[0]

    def ring(self) -> np.ndarray:
        """Points with the closing segment made explicit (start repeated at the end)."""
        if len(self) == 0:
            return self.points.copy()
        return np.vstack((self.points, self.points[:1]))

    def distinct_count(self) -> int:
        if len(self) == 0:
            return 0
        return int(np.unique(self.points, axis=0).shape[0])

    @property
    def is_degenerate(self) -> bool:
        return self.distinct_count() < 3

    def signed_area(self) -> float:
        """Shoelace area, positive for counter-clockwise rings."""
        if len(self) < 3:
            return 0.0
        x = self.points[:, 0]
        y = self.points[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    def as_shapely(self) -> Polygon:
        return Polygon(self.points)

    def is_simple(self) -> bool:
        """True when the ring does not touch or cross itself."""
        if self.is_degenerate:
            return False
        return bool(LinearRing(self.points).is_simple)


def valid_mask(verts: VertexGrid, cutoff: float = DEFAULT_NO_DATA_CUTOFF) -> np.ndarray:
    """Boolean ``(rows, cols)`` mask of vertices strictly above the cutoff."""
    return verts.z > cutoff


def valid_column_bounds(verts: VertexGrid, cutoff: float = DEFAULT_NO_DATA_CUTOFF) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-row first and last valid column indices.

    Returns:
        tuple: ``(first, last)`` integer arrays of length ``verts.rows``;
               rows without a valid vertex hold ``NO_COLUMN``
    """
    mask = valid_mask(verts, cutoff)
    has_valid = mask.any(axis=1)

    # argmax returns the first True along the scan direction
    first = np.where(has_valid, mask.argmax(axis=1), NO_COLUMN)
    last = np.where(has_valid, verts.cols - 1 - mask[:, ::-1].argmax(axis=1), NO_COLUMN)
    return first.astype(np.int64), last.astype(np.int64)


def extract_outline(verts: VertexGrid, cutoff: float = DEFAULT_NO_DATA_CUTOFF) -> Polygon2D:
    """
    Trace the closed base outline of the valid region.

    Args:
        verts (VertexGrid): surface vertices
        cutoff (float): vertices with ``z <= cutoff`` are no-data

    Returns:
        Polygon2D: ``2 * k`` points for ``k`` rows holding a valid vertex,
                   empty when no row does
    """
    first, last = valid_column_bounds(verts, cutoff)

    rows = np.arange(verts.rows)
    down = rows[first != NO_COLUMN]
    up = rows[::-1][last[::-1] != NO_COLUMN]

    left_side = verts.points[down, first[down], :2]
    right_side = verts.points[up, last[up], :2]
    return Polygon2D(np.vstack((left_side, right_side)))
