"""
Elevation grid to printable slab (ASCII STL) generation.
"""
from .config import SlabConfig, load_yaml
from .elevation import ElevationGrid, Elevation, ArrayElevation
from .errors import (
    SlabError,
    InvalidDimensions,
    NonFiniteSamples,
    DegenerateOutline,
    EmptyMesh,
    MalformedFaceIndex,
)
from .mesh import IndexedMesh
from .surfacegenerator import VertexGrid, build_surface
from .outline import Polygon2D, extract_outline, valid_column_bounds, valid_mask
from .basegenerator import BaseGenerator, extrude
from .merger import merge, merge_meshes
from .stlwriter import to_ascii_stl, iter_ascii_stl, save_stl, face_normals
from .slabgenerator import SlabGenerator, SlabResult

__version__ = "0.1.0"
