"""
Pytest configuration and shared fixtures for terrain-slab tests.
"""

import numpy as np
import pytest

from terrain_slab.elevation import ElevationGrid
from terrain_slab.mesh import IndexedMesh


@pytest.fixture
def make_grid():
    """Factory building an ElevationGrid from a list of rows."""
    def _make(rows):
        return ElevationGrid.from_array(np.asarray(rows, dtype=np.float64))
    return _make


@pytest.fixture
def raised_block_grid():
    """4x4 grid: a raised 2x2 interior block framed by -1 samples.

    Scaled by 1/48 the frame sits just below zero, still above the -1 cutoff,
    so every vertex counts as valid.
    """
    samples = [
        -1, -1, -1, -1,
        -1, 5, 5, -1,
        -1, 5, 5, -1,
        -1, -1, -1, -1,
    ]
    return ElevationGrid.from_samples(4, 4, samples)


@pytest.fixture
def plateau_grid():
    """4x4 grid where only the interior 2x2 block is above the cutoff."""
    samples = [
        -100, -100, -100, -100,
        -100, 5, 5, -100,
        -100, 5, 5, -100,
        -100, -100, -100, -100,
    ]
    return ElevationGrid.from_samples(4, 4, samples)


@pytest.fixture
def nodata_grid():
    """3x3 grid with every sample far below the cutoff."""
    return ElevationGrid.from_samples(3, 3, [-9999.0] * 9)


@pytest.fixture
def unit_square_mesh():
    """Unit square in the z=0 plane as two counter-clockwise triangles."""
    vertices = [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
    ]
    faces = [[0, 1, 2], [0, 2, 3]]
    return IndexedMesh(vertices, faces)
