"""
Pytest tests for mesh merging.
"""

import numpy as np
import pytest

from terrain_slab.basegenerator import extrude
from terrain_slab.errors import MalformedFaceIndex
from terrain_slab.merger import as_indexed_mesh, merge, merge_meshes
from terrain_slab.mesh import IndexedMesh
from terrain_slab.outline import extract_outline
from terrain_slab.surfacegenerator import build_surface


class TestMerge:
    """Tests for merge / merge_meshes."""

    def test_counts_add_up(self, plateau_grid):
        verts = build_surface(plateau_grid)
        surface = verts.to_mesh()
        base = extrude(extract_outline(verts, -1.0), -16.0)
        merged = merge(surface, base)
        assert merged.vertex_count == surface.vertex_count + base.vertex_count
        assert merged.face_count == surface.face_count + base.face_count

    def test_base_indices_offset(self, unit_square_mesh):
        merged = merge_meshes(unit_square_mesh, unit_square_mesh)
        assert merged.faces[:2].tolist() == [[0, 1, 2], [0, 2, 3]]
        assert merged.faces[2:].tolist() == [[4, 5, 6], [4, 6, 7]]

    def test_geometry_preserved(self, plateau_grid):
        verts = build_surface(plateau_grid)
        surface = verts.to_mesh()
        base = extrude(extract_outline(verts, -1.0), -16.0)
        merged = merge(surface, base)
        n = surface.face_count
        assert np.allclose(merged.triangles()[:n], surface.triangles())
        assert np.allclose(merged.triangles()[n:], base.triangles())

    def test_vertex_grid_input(self, raised_block_grid, unit_square_mesh):
        verts = build_surface(raised_block_grid)
        merged = merge(verts, unit_square_mesh)
        assert merged.vertex_count == 16 + 4
        assert merged.face_count == 18 + 2
        assert merged.faces.max() == 19

    def test_malformed_input(self, unit_square_mesh):
        bad = IndexedMesh(unit_square_mesh.vertices, [[0, 1, 7]])
        with pytest.raises(MalformedFaceIndex) as excinfo:
            merge(unit_square_mesh, bad)
        assert excinfo.value.index == 7
        assert excinfo.value.vertex_count == 4

    def test_negative_index(self, unit_square_mesh):
        bad = IndexedMesh(unit_square_mesh.vertices, [[0, -1, 2]])
        with pytest.raises(MalformedFaceIndex):
            merge_meshes(bad)

    def test_no_meshes(self):
        with pytest.raises(ValueError):
            merge_meshes()

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            as_indexed_mesh([[0, 0, 0]])
