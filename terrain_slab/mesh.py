from dataclasses import dataclass

import numpy as np

from .errors import MalformedFaceIndex


@dataclass(eq=False)
class IndexedMesh:
    """Triangle mesh as a ``(n, 3)`` float vertex buffer and a ``(m, 3)`` index buffer."""

    vertices: np.ndarray
    faces: np.ndarray

    def __post_init__(self):
        self.vertices = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        self.faces = np.asarray(self.faces, dtype=np.int64).reshape(-1, 3)

    @classmethod
    def empty(cls) -> "IndexedMesh":
        return cls(np.zeros((0, 3), dtype=np.float64), np.zeros((0, 3), dtype=np.int64))

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def face_count(self) -> int:
        return int(self.faces.shape[0])

    def validate(self) -> "IndexedMesh":
        """Raise ``MalformedFaceIndex`` if any face points outside the vertex buffer."""
        if self.faces.size:
            bad = (self.faces < 0) | (self.faces >= self.vertex_count)
            if bad.any():
                raise MalformedFaceIndex(int(self.faces[bad][0]), self.vertex_count)
        return self

    def triangles(self) -> np.ndarray:
        """Corner coordinates of every face, shape ``(m, 3, 3)``."""
        return self.vertices[self.faces]
