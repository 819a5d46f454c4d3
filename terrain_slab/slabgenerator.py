#!/usr/bin/env python3
"""
Slab Generator

Runs the full elevation-to-print pipeline:

    ElevationGrid -> surface vertex grid -> base outline -> extruded base
                  -> merged mesh -> ASCII STL

The geometry stages are pure functions; this class owns the policy decisions
(what to do when the outline is degenerate) and all console reporting.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .basegenerator import BaseGenerator
from .config import SlabConfig
from .console import output
from .elevation import Elevation, ElevationGrid
from .errors import DegenerateOutline
from .merger import merge
from .mesh import IndexedMesh
from .outline import Polygon2D, extract_outline, valid_mask
from .stlwriter import save_stl, to_ascii_stl
from .surfacegenerator import VertexGrid, build_surface


@dataclass(eq=False)
class SlabResult:
    """Everything the pipeline produced for one grid."""

    vertex_grid: VertexGrid
    surface: IndexedMesh
    outline: Polygon2D
    base: Optional[IndexedMesh]
    merged: IndexedMesh

    @property
    def has_base(self) -> bool:
        return self.base is not None


class SlabGenerator:
    """
    Generates printable slabs from elevation grids.

    Args:
        config (SlabConfig, optional): geometry/export settings, defaults if None
    """

    def __init__(self, config: Optional[SlabConfig] = None):
        self.config = config or SlabConfig()
        self.base_generator = BaseGenerator(self.config.extrusion_depth)

    def generate(self, grid: ElevationGrid) -> SlabResult:
        """
        Build surface, base and merged meshes for an elevation grid.

        Returns:
            SlabResult: ``base`` is None when the outline is degenerate, in
                        which case ``merged`` holds the surface alone
        """
        cfg = self.config
        output.header("Slab Generation", f"Grid: {grid.width} × {grid.height}")

        output.subheader("Building surface")
        vertex_grid = build_surface(grid, cfg.elevation_scale)
        surface = vertex_grid.to_mesh()
        mask = valid_mask(vertex_grid, cfg.no_data_cutoff)
        output.grid_info(grid, valid_cells=int(np.count_nonzero(mask)))

        output.subheader("Tracing base outline")
        outline = extract_outline(vertex_grid, cfg.no_data_cutoff)
        output.info(f"Outline points: {len(outline)} (cutoff z > {cfg.no_data_cutoff})")

        base = None
        if outline.is_degenerate:
            output.warning("No usable outline (fewer than 3 distinct outline points); skipping base")
        else:
            if not outline.is_simple():
                output.warning("Outline self-intersects; the valid region is not row-convex")
            output.subheader("Extruding base")
            try:
                base = self.base_generator.extrude(outline, cfg.extrusion_depth)
                output.info(f"Base depth: {cfg.extrusion_depth}, outline area: {abs(outline.signed_area()):.1f}")
            except DegenerateOutline as exc:
                output.warning(f"Skipping base: {exc}")

        output.subheader("Merging meshes")
        merged = merge(surface, base) if base is not None else surface

        output.mesh_stats("Meshes", {"Surface": surface, "Base": base, "Merged": merged})
        output.success("Slab generation complete!")

        return SlabResult(
            vertex_grid=vertex_grid,
            surface=surface,
            outline=outline,
            base=base,
            merged=merged,
        )

    def generate_from_source(self, source: Elevation) -> SlabResult:
        """Pull a grid from an elevation source, then ``generate`` it."""
        output.subheader("Loading elevation data")
        return self.generate(source.get_elevation())

    def stl_text(self, result: SlabResult, surface_only: bool = False) -> str:
        mesh = result.surface if surface_only else result.merged
        return to_ascii_stl(mesh, self.config.solid_name, self.config.stl_precision)

    def export_stl(self, result: SlabResult, path, surface_only: bool = False) -> str:
        """
        Save the merged mesh (or the surface alone) as ASCII STL.

        Returns:
            str: the written path
        """
        mesh = result.surface if surface_only else result.merged
        output.progress_info(f"Writing {mesh.face_count:,} facets")
        saved = save_stl(mesh, path, self.config.solid_name, self.config.stl_precision)
        output.file_saved(saved, "STL")
        return saved
