"""
Surface Generator

Turns an elevation grid into a regular vertex grid (one vertex per sample) and
materializes the grid's two-triangles-per-quad triangulation.

Coordinate system: unit cell spacing, centered on the origin, Z-up.
Column ``c`` maps to ``x = c - (width - 1) / 2`` and row ``r`` maps to
``y = (height - 1) / 2 - r`` so the first raster row is the +Y edge.
"""

from dataclasses import dataclass

import numpy as np

from .config import DEFAULT_ELEVATION_SCALE
from .elevation import ElevationGrid
from .errors import InvalidDimensions, NonFiniteSamples
from .mesh import IndexedMesh


@dataclass(eq=False)
class VertexGrid:
    """``rows`` x ``cols`` vertices stored as a ``(rows, cols, 3)`` array."""

    rows: int
    cols: int
    points: np.ndarray

    @property
    def vertex_count(self) -> int:
        return self.rows * self.cols

    @property
    def z(self) -> np.ndarray:
        return self.points[:, :, 2]

    def vertex(self, row: int, col: int) -> np.ndarray:
        return self.points[row, col]

    def vertices(self) -> np.ndarray:
        """Flat row-major ``(rows * cols, 3)`` vertex buffer."""
        return self.points.reshape(-1, 3)

    def faces(self) -> np.ndarray:
        """Two counter-clockwise triangles per grid quad, quads in row-major order."""
        nr, nc = self.rows, self.cols
        if nr < 2 or nc < 2:
            return np.zeros((0, 3), dtype=np.int64)

        i = np.arange(nr - 1, dtype=np.int64)[:, None]
        j = np.arange(nc - 1, dtype=np.int64)[None, :]
        a = i * nc + j       # (r, c)
        b = a + nc           # (r + 1, c)
        c = b + 1            # (r + 1, c + 1)
        d = a + 1            # (r, c + 1)
        return np.stack([a, b, d, b, c, d], axis=-1).reshape(-1, 3)

    def to_mesh(self) -> IndexedMesh:
        return IndexedMesh(self.vertices().copy(), self.faces())


def build_surface(grid: ElevationGrid, elevation_scale: float = DEFAULT_ELEVATION_SCALE) -> VertexGrid:
    """
    Build the surface vertex grid for an elevation grid.

    Args:
        grid (ElevationGrid): row-major samples
        elevation_scale (float): multiplier applied to every sample to get z

    Returns:
        VertexGrid: ``grid.height`` rows by ``grid.width`` columns

    Raises:
        InvalidDimensions: if the sample count does not match the dimensions
        NonFiniteSamples: if any sample is NaN or infinite
    """
    width, height = int(grid.width), int(grid.height)
    samples = np.asarray(grid.samples, dtype=np.float64).reshape(-1)
    if width < 1 or height < 1 or samples.shape[0] != width * height:
        raise InvalidDimensions(width, height, samples.shape[0])
    non_finite = int(np.count_nonzero(~np.isfinite(samples)))
    if non_finite:
        raise NonFiniteSamples(non_finite)

    xs = np.arange(width, dtype=np.float64) - (width - 1) / 2.0
    ys = (height - 1) / 2.0 - np.arange(height, dtype=np.float64)

    Xg = np.broadcast_to(xs[None, :], (height, width))
    Yg = np.broadcast_to(ys[:, None], (height, width))
    Zg = samples.reshape(height, width) * float(elevation_scale)

    points = np.stack((Xg, Yg, Zg), axis=-1)
    return VertexGrid(rows=height, cols=width, points=points)
