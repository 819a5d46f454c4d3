"""
Error types raised by the slab pipeline.

Every error derives from ``SlabError``, which is itself a ``ValueError`` so
callers that already guard against bad input with ``except ValueError`` keep
working.
"""


class SlabError(ValueError):
    """Base class for all pipeline failures."""


class InvalidDimensions(SlabError):
    """The sample count does not match ``width * height`` (or a dimension is not positive)."""

    def __init__(self, width, height, sample_count):
        self.width = width
        self.height = height
        self.sample_count = sample_count
        super().__init__(
            f"Grid of {width}x{height} needs {width * height} samples, got {sample_count}"
        )


class NonFiniteSamples(SlabError):
    """The grid holds NaN or infinite samples."""

    def __init__(self, count):
        self.count = count
        super().__init__(
            f"Elevation grid has {count} non-finite sample(s); fill them with a value below the cutoff"
        )


class DegenerateOutline(SlabError):
    """The base outline cannot be capped or extruded."""


class EmptyMesh(SlabError):
    """Serialization was attempted on a mesh without faces."""


class MalformedFaceIndex(SlabError):
    """A face references a vertex index outside the mesh."""

    def __init__(self, index, vertex_count):
        self.index = index
        self.vertex_count = vertex_count
        super().__init__(
            f"Face index {index} out of range for mesh with {vertex_count} vertices"
        )
