from typing import Union

import numpy as np

from .mesh import IndexedMesh
from .surfacegenerator import VertexGrid

MeshLike = Union[IndexedMesh, VertexGrid]


def as_indexed_mesh(mesh: MeshLike) -> IndexedMesh:
    """Materialize a vertex grid's implicit triangulation; indexed meshes pass through."""
    if isinstance(mesh, VertexGrid):
        return mesh.to_mesh()
    if isinstance(mesh, IndexedMesh):
        return mesh
    raise TypeError(f"Cannot merge object of type {type(mesh).__name__}")


def merge_meshes(*meshes: MeshLike) -> IndexedMesh:
    """
    Concatenate meshes into one without welding vertices.

    Vertices are appended in argument order; each mesh's faces are shifted by
    the number of vertices that precede it.

    Raises:
        MalformedFaceIndex: if an input face references a vertex outside its own mesh
    """
    if not meshes:
        raise ValueError("merge_meshes needs at least one mesh")

    vertices_list = []
    faces_list = []
    offset = 0
    for mesh in meshes:
        indexed = as_indexed_mesh(mesh).validate()
        vertices_list.append(indexed.vertices)
        faces_list.append(indexed.faces + np.int64(offset))
        offset += indexed.vertex_count

    return IndexedMesh(np.concatenate(vertices_list, axis=0), np.concatenate(faces_list, axis=0))


def merge(surface: MeshLike, base: IndexedMesh) -> IndexedMesh:
    """Surface first, then the base solid with indices offset by the surface vertex count."""
    return merge_meshes(surface, base)
