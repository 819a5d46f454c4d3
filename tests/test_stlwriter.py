"""
Pytest tests for ASCII STL serialization.
"""

import io

import numpy as np
import pytest
import trimesh

from terrain_slab.errors import EmptyMesh, MalformedFaceIndex
from terrain_slab.mesh import IndexedMesh
from terrain_slab.stlwriter import face_normals, iter_ascii_stl, save_stl, to_ascii_stl


class TestToAsciiStl:
    """Tests for to_ascii_stl."""

    def test_header_and_footer(self, unit_square_mesh):
        text = to_ascii_stl(unit_square_mesh)
        assert text.startswith("solid Scene\n")
        assert text.endswith("endsolid Scene\n")

    def test_custom_solid_name(self, unit_square_mesh):
        text = to_ascii_stl(unit_square_mesh, solid_name="Island")
        assert text.splitlines()[0] == "solid Island"
        assert text.splitlines()[-1] == "endsolid Island"

    def test_one_facet_per_face(self, unit_square_mesh):
        text = to_ascii_stl(unit_square_mesh)
        assert text.count("facet normal") == 2
        assert text.count("endfacet") == 2
        assert text.count("outer loop") == 2
        assert text.count("vertex ") == 6

    def test_facet_layout(self, unit_square_mesh):
        lines = to_ascii_stl(unit_square_mesh).splitlines()
        assert lines[1] == "\tfacet normal 0 0 1"
        assert lines[2] == "\t\touter loop"
        assert lines[3] == "\t\t\tvertex 0 0 0"
        assert lines[4] == "\t\t\tvertex 1 0 0"
        assert lines[5] == "\t\t\tvertex 1 1 0"
        assert lines[6] == "\t\tendloop"
        assert lines[7] == "\tendfacet"

    def test_precision(self):
        mesh = IndexedMesh([[0, 0, 0], [1.0 / 3.0, 0, 0], [0, 1, 0]], [[0, 1, 2]])
        assert "vertex 0.333333333 0 0" in to_ascii_stl(mesh)
        assert "vertex 0.333333 0 0" in to_ascii_stl(mesh, precision=6)

    def test_trimesh_can_read_it(self, unit_square_mesh):
        text = to_ascii_stl(unit_square_mesh)
        loaded = trimesh.load_mesh(io.BytesIO(text.encode("utf-8")), file_type="stl", process=False)
        assert len(loaded.faces) == 2
        assert np.allclose(loaded.triangles, unit_square_mesh.triangles())
        assert np.allclose(loaded.face_normals, [0.0, 0.0, 1.0])

    def test_empty_mesh(self):
        with pytest.raises(EmptyMesh):
            to_ascii_stl(IndexedMesh.empty())

    def test_malformed_mesh(self, unit_square_mesh):
        bad = IndexedMesh(unit_square_mesh.vertices, [[0, 1, 4]])
        with pytest.raises(MalformedFaceIndex):
            to_ascii_stl(bad)

    def test_chunks_join_to_full_text(self, unit_square_mesh):
        chunks = list(iter_ascii_stl(unit_square_mesh))
        assert chunks[0] == "solid Scene\n"
        assert chunks[-1] == "endsolid Scene\n"
        assert "".join(chunks) == to_ascii_stl(unit_square_mesh)

    def test_checks_mesh_before_iteration(self, unit_square_mesh):
        """Errors surface when the iterator is created, not on the first chunk."""
        with pytest.raises(EmptyMesh):
            iter_ascii_stl(IndexedMesh.empty())
        bad = IndexedMesh(unit_square_mesh.vertices, [[0, 1, 9]])
        with pytest.raises(MalformedFaceIndex):
            iter_ascii_stl(bad)


class TestFaceNormals:
    """Tests for face_normals."""

    def test_unit_length(self):
        mesh = IndexedMesh([[0, 0, 0], [2, 0, 0], [0, 0, 3]], [[0, 1, 2]])
        assert np.allclose(face_normals(mesh), [[0.0, -1.0, 0.0]])

    def test_degenerate_face_gets_zero_normal(self):
        mesh = IndexedMesh([[0, 0, 0], [1, 0, 0], [2, 0, 0]], [[0, 1, 2]])
        assert np.allclose(face_normals(mesh), 0.0)
        assert "facet normal 0 0 0" in to_ascii_stl(mesh)


class TestSaveStl:
    """Tests for save_stl."""

    def test_writes_file(self, unit_square_mesh, tmp_path):
        path = save_stl(unit_square_mesh, tmp_path / "out" / "Scene.stl")
        with open(path, "r", encoding="utf-8") as fh:
            assert fh.read() == to_ascii_stl(unit_square_mesh)

    def test_empty_mesh_leaves_no_file(self, tmp_path):
        target = tmp_path / "empty.stl"
        with pytest.raises(EmptyMesh):
            save_stl(IndexedMesh.empty(), target)
        assert not target.exists()

    def test_invalid_mesh_creates_no_directory(self, tmp_path):
        target = tmp_path / "never" / "empty.stl"
        with pytest.raises(EmptyMesh):
            save_stl(IndexedMesh.empty(), target)
        assert not (tmp_path / "never").exists()
