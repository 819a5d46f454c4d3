from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class ElevationGrid:
    """Row-major elevation samples: ``samples[row * width + col]``."""

    width: int
    height: int
    samples: np.ndarray

    @classmethod
    def from_array(cls, elevation_data) -> "ElevationGrid":
        """Build a grid from a 2D ``(rows, cols)`` array."""
        data = np.asarray(elevation_data, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError(f"Elevation data must be 2D, got shape {data.shape}")
        height, width = data.shape
        return cls(width=int(width), height=int(height), samples=data.reshape(-1).copy())

    @classmethod
    def from_samples(cls, width: int, height: int, samples) -> "ElevationGrid":
        """Build a grid from a flat row-major sample sequence (validated later by the surface builder)."""
        return cls(
            width=int(width),
            height=int(height),
            samples=np.asarray(samples, dtype=np.float64).reshape(-1),
        )

    def as_array(self) -> np.ndarray:
        """Return the samples reshaped to ``(height, width)``."""
        return self.samples.reshape(self.height, self.width)


class Elevation(ABC):
    """A source of elevation grids (file decoder, in-memory array, ...)."""

    @abstractmethod
    def get_elevation(self) -> ElevationGrid:
        pass


class ArrayElevation(Elevation):
    def __init__(self, elevation_data):
        self.elevation_data = np.asarray(elevation_data, dtype=np.float64)

    def get_elevation(self) -> ElevationGrid:
        return ElevationGrid.from_array(self.elevation_data)
