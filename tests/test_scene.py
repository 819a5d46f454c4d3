"""
Pytest tests for the display hand-off.
"""

import numpy as np

from terrain_slab.scene import build_scene, display_transform, export_preview, to_trimesh
from terrain_slab.slabgenerator import SlabGenerator


class TestDisplayTransform:
    """Tests for the Z-up to Y-up presentation rotation."""

    def test_up_axis(self):
        up = display_transform() @ np.array([0.0, 0.0, 1.0, 0.0])
        assert np.allclose(up[:3], [0.0, 1.0, 0.0])

    def test_is_rotation(self):
        rot = display_transform()[:3, :3]
        assert np.allclose(rot @ rot.T, np.eye(3))
        assert np.isclose(np.linalg.det(rot), 1.0)


class TestScene:
    """Tests for trimesh conversion and previews."""

    def test_to_trimesh_keeps_buffers(self, plateau_grid):
        result = SlabGenerator().generate(plateau_grid)
        tm = to_trimesh(result.base)
        assert len(tm.vertices) == result.base.vertex_count
        assert len(tm.faces) == result.base.face_count

    def test_scene_nodes(self, plateau_grid, nodata_grid):
        generator = SlabGenerator()
        assert len(build_scene(generator.generate(plateau_grid)).geometry) == 2
        assert len(build_scene(generator.generate(nodata_grid)).geometry) == 1

    def test_export_preview(self, plateau_grid, tmp_path):
        result = SlabGenerator().generate(plateau_grid)
        path = export_preview(result, tmp_path / "preview" / "Scene_preview.glb")
        with open(path, "rb") as fh:
            assert fh.read(4) == b"glTF"
