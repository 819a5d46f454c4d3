#!/usr/bin/env python3
"""
Base Generator

Extrudes the closed base outline into a flat-bottomed prism: a cap in the
outline's own plane (z=0), a second cap translated by the extrusion depth, and
side walls of two triangles per outline edge.

The mesh is emitted non-indexed: every triangle gets three fresh vertices and
the faces are the sequential triples [0, 1, 2], [3, 4, 5], ...

Coordinate system: X/Y in the outline plane, Z-up. A negative depth extrudes
downward. Faces are wound outward (right-hand rule) for either sign of depth.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import Polygon
import trimesh

from .config import DEFAULT_EXTRUSION_DEPTH
from .errors import DegenerateOutline
from .mesh import IndexedMesh
from .outline import Polygon2D

# Shoelace areas at or below this are treated as zero
AREA_EPSILON = 1e-12


class BaseGenerator:
    def __init__(self, depth: float = DEFAULT_EXTRUSION_DEPTH) -> None:
        self.depth = float(depth)

    # ---------- contour helpers ----------
    @staticmethod
    def _clean_contour(points: np.ndarray) -> np.ndarray:
        """Drop consecutive duplicate points, including a closing copy of the start."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] == 0:
            return pts
        keep = np.ones(pts.shape[0], dtype=bool)
        keep[1:] = np.any(pts[1:] != pts[:-1], axis=1)
        pts = pts[keep]
        while pts.shape[0] > 1 and np.array_equal(pts[0], pts[-1]):
            pts = pts[:-1]
        return pts

    @staticmethod
    def _signed_area(points: np.ndarray) -> float:
        x = points[:, 0]
        y = points[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))

    @staticmethod
    def _triangle_areas(tris: np.ndarray) -> np.ndarray:
        """Signed areas of ``(t, 3, 2)`` triangles, positive when counter-clockwise."""
        ab = tris[:, 1] - tris[:, 0]
        ac = tris[:, 2] - tris[:, 0]
        return 0.5 * (ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0])

    def _triangulate_cap(self, contour: np.ndarray) -> np.ndarray:
        """Ear-clip a counter-clockwise contour into ``(t, 3, 2)`` counter-clockwise triangles."""
        verts, faces = trimesh.creation.triangulate_polygon(Polygon(contour), engine="earcut")
        verts = np.asarray(verts, dtype=np.float64)[:, :2]
        faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
        if faces.shape[0] == 0:
            return np.zeros((0, 3, 2), dtype=np.float64)

        tris = verts[faces]
        areas = self._triangle_areas(tris)
        tris = tris[np.abs(areas) > AREA_EPSILON]
        areas = areas[np.abs(areas) > AREA_EPSILON]

        # Normalize winding, the triangulator does not promise an orientation
        clockwise = areas < 0
        tris[clockwise] = tris[clockwise][:, ::-1]
        return tris

    # ---------- assembly ----------
    @staticmethod
    def _lift(tris: np.ndarray, z: float) -> np.ndarray:
        """Give ``(t, 3, 2)`` planar triangles a constant z."""
        zs = np.full(tris.shape[:2] + (1,), float(z), dtype=np.float64)
        return np.concatenate((tris, zs), axis=-1)

    @staticmethod
    def _side_walls(contour: np.ndarray, depth: float) -> np.ndarray:
        """Two outward triangles per edge of a counter-clockwise contour, shape ``(2n, 3, 3)``."""
        n = contour.shape[0]
        p = contour
        q = np.roll(contour, -1, axis=0)
        top = np.zeros((n, 1))
        bottom = np.full((n, 1), depth)

        Ti = np.hstack((p, top))
        Tj = np.hstack((q, top))
        Bi = np.hstack((p, bottom))
        Bj = np.hstack((q, bottom))

        # Outward for depth < 0 (walls hang below the outline plane)
        first = np.stack((Ti, Bi, Tj), axis=1)
        second = np.stack((Tj, Bi, Bj), axis=1)
        walls = np.stack((first, second), axis=1).reshape(-1, 3, 3)
        if depth > 0:
            walls = walls[:, ::-1]
        return walls

    # ---------- main entry ----------
    def extrude(self, outline: Polygon2D, depth: float | None = None) -> IndexedMesh:
        """Extrude a closed outline into a prism.

        Args:
            outline: Closed base outline in the z=0 plane
            depth: Extrusion distance along Z (defaults to the generator's depth)

        Returns:
            IndexedMesh: Non-indexed prism (sequential faces), caps first then walls

        Raises:
            DegenerateOutline: fewer than 3 distinct points or zero enclosed area
        """
        depth = self.depth if depth is None else float(depth)
        if depth == 0:
            raise ValueError("Extrusion depth must be non-zero")

        contour = self._clean_contour(outline.points)
        if contour.shape[0] < 3:
            raise DegenerateOutline(
                f"Outline has {contour.shape[0]} distinct point(s); at least 3 are needed"
            )

        area = self._signed_area(contour)
        if abs(area) <= AREA_EPSILON:
            raise DegenerateOutline("Outline encloses no area (single row or column of valid samples)")
        if area < 0:
            contour = contour[::-1].copy()

        cap = self._triangulate_cap(contour)
        if cap.shape[0] == 0:
            raise DegenerateOutline("Outline could not be triangulated")

        native_cap = self._lift(cap, 0.0)
        moved_cap = self._lift(cap, depth)
        if depth < 0:
            # native plane on top faces +Z, translated cap underneath faces -Z
            moved_cap = moved_cap[:, ::-1]
        else:
            native_cap = native_cap[:, ::-1]

        walls = self._side_walls(contour, depth)

        triangles = np.concatenate((native_cap, moved_cap, walls), axis=0)
        vertices = triangles.reshape(-1, 3)
        faces = np.arange(vertices.shape[0], dtype=np.int64).reshape(-1, 3)
        return IndexedMesh(vertices, faces)


def extrude(outline: Polygon2D, depth: float = DEFAULT_EXTRUSION_DEPTH) -> IndexedMesh:
    """Extrude ``outline`` by ``depth`` (see ``BaseGenerator.extrude``)."""
    return BaseGenerator(depth).extrude(outline)
