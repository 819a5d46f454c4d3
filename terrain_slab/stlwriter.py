"""
ASCII STL serialization.

Layout per facet (numbers in %g notation with a configurable number of
significant digits):

    facet normal nx ny nz
        outer loop
            vertex x y z   (x3, in the face's stored order)
        endloop
    endfacet
"""

import os
from typing import Iterator

import numpy as np

from .config import DEFAULT_SOLID_NAME, DEFAULT_STL_PRECISION
from .errors import EmptyMesh
from .mesh import IndexedMesh

# Facets formatted per write
CHUNK_FACETS = 10000


def face_normals(mesh: IndexedMesh) -> np.ndarray:
    """Unit normals of ``(v1 - v0) x (v2 - v0)``; zero vectors for degenerate faces."""
    tris = mesh.triangles()
    normals = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    lengths = np.linalg.norm(normals, axis=1)
    nonzero = lengths > 0
    normals[nonzero] /= lengths[nonzero][:, None]
    normals[~nonzero] = 0.0
    return normals


def _facet_template(precision: int) -> str:
    num = f"%.{int(precision)}g"
    vertex = f"\t\t\tvertex {num} {num} {num}\n"
    return (
        f"\tfacet normal {num} {num} {num}\n"
        "\t\touter loop\n"
        f"{vertex}{vertex}{vertex}"
        "\t\tendloop\n"
        "\tendfacet\n"
    )


def _iter_facet_chunks(rows: np.ndarray, solid_name: str, precision: int) -> Iterator[str]:
    template = _facet_template(precision)
    yield f"solid {solid_name}\n"
    for start in range(0, rows.shape[0], CHUNK_FACETS):
        chunk = rows[start:start + CHUNK_FACETS].tolist()
        yield "".join(template % tuple(row) for row in chunk)
    yield f"endsolid {solid_name}\n"


def iter_ascii_stl(
    mesh: IndexedMesh,
    solid_name: str = DEFAULT_SOLID_NAME,
    precision: int = DEFAULT_STL_PRECISION,
) -> Iterator[str]:
    """
    Return an iterator over the ASCII STL text for ``mesh`` in chunks.

    The mesh is checked when this is called, before any chunk is produced.

    Raises:
        EmptyMesh: if the mesh has no faces
        MalformedFaceIndex: if a face references a missing vertex
    """
    if mesh.face_count == 0:
        raise EmptyMesh("Cannot serialize a mesh without faces")
    mesh.validate()

    normals = face_normals(mesh)
    rows = np.concatenate((normals, mesh.triangles().reshape(-1, 9)), axis=1)
    return _iter_facet_chunks(rows, solid_name, precision)


def to_ascii_stl(
    mesh: IndexedMesh,
    solid_name: str = DEFAULT_SOLID_NAME,
    precision: int = DEFAULT_STL_PRECISION,
) -> str:
    """Serialize ``mesh`` as a single ASCII STL string."""
    return "".join(iter_ascii_stl(mesh, solid_name, precision))


def save_stl(
    mesh: IndexedMesh,
    path,
    solid_name: str = DEFAULT_SOLID_NAME,
    precision: int = DEFAULT_STL_PRECISION,
) -> str:
    """Write ``mesh`` to ``path`` as ASCII STL, creating parent directories. Returns the path."""
    path = str(path)
    # Raises before anything touches the filesystem
    chunks = iter_ascii_stl(mesh, solid_name, precision)

    parent = os.path.dirname(path)
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        for chunk in chunks:
            fh.write(chunk)
    return path
