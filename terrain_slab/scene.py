"""
Display hand-off.

The pipeline produces meshes in its native Z-up convention. Viewers that expect
Y-up get a fixed presentation rotation (Euler XYZ with rotation.x = pi/2 and
rotation.y = pi). Nothing here changes the exported STL.
"""

import math
import os

import numpy as np
import trimesh
from trimesh.transformations import rotation_matrix

from .mesh import IndexedMesh


def display_transform() -> np.ndarray:
    """4x4 presentation rotation: ``Rx(pi/2) @ Ry(pi)``."""
    rx = rotation_matrix(math.pi / 2.0, [1, 0, 0])
    ry = rotation_matrix(math.pi, [0, 1, 0])
    return rx @ ry


def to_trimesh(mesh: IndexedMesh) -> trimesh.Trimesh:
    """Wrap an ``IndexedMesh`` without merging or reordering anything."""
    return trimesh.Trimesh(
        vertices=mesh.vertices.copy(),
        faces=mesh.faces.copy(),
        process=False,
    )


def build_scene(result) -> trimesh.Scene:
    """Scene with the surface and (when present) the base as separate nodes, display rotation applied."""
    transform = display_transform()
    scene = trimesh.Scene()
    scene.add_geometry(to_trimesh(result.surface), node_name="surface", geom_name="surface", transform=transform)
    if result.base is not None:
        scene.add_geometry(to_trimesh(result.base), node_name="base", geom_name="base", transform=transform)
    return scene


def export_preview(result, path) -> str:
    """Write a GLB preview of ``result`` for external viewers. Returns the path."""
    path = str(path)
    parent = os.path.dirname(path)
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
    scene = build_scene(result)
    scene.export(path, file_type="glb")
    return path
