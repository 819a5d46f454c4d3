"""Configuration for slab generation"""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # type: ignore

DEFAULT_ELEVATION_SCALE = 1.0 / 48.0
DEFAULT_NO_DATA_CUTOFF = -1.0
DEFAULT_EXTRUSION_DEPTH = -16.0
DEFAULT_SOLID_NAME = "Scene"
DEFAULT_STL_PRECISION = 9
DEFAULT_OUTPUT_NAME = "Scene.stl"


@dataclass
class SlabConfig:
    """Geometry and export settings shared by every pipeline stage"""

    elevation_scale: float = DEFAULT_ELEVATION_SCALE
    no_data_cutoff: float = DEFAULT_NO_DATA_CUTOFF
    extrusion_depth: float = DEFAULT_EXTRUSION_DEPTH
    solid_name: str = DEFAULT_SOLID_NAME
    stl_precision: int = DEFAULT_STL_PRECISION

    def __post_init__(self):
        self.elevation_scale = float(self.elevation_scale)
        self.no_data_cutoff = float(self.no_data_cutoff)
        self.extrusion_depth = float(self.extrusion_depth)
        self.stl_precision = int(self.stl_precision)
        self.solid_name = str(self.solid_name)

        if self.elevation_scale == 0:
            raise ValueError("elevation_scale must be non-zero")
        if self.extrusion_depth == 0:
            raise ValueError("extrusion_depth must be non-zero")
        if self.stl_precision < 6:
            raise ValueError(
                f"stl_precision must keep at least 6 significant digits, got {self.stl_precision}"
            )
        if not self.solid_name.strip() or "\n" in self.solid_name:
            raise ValueError("solid_name must be a non-empty single line")

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "SlabConfig":
        values = dict(values or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown model settings: {', '.join(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def model_defaults() -> Dict[str, Any]:
    return SlabConfig().to_dict()


def source_defaults() -> Dict[str, Any]:
    return {
        "type": "geotiff",
        "band": 1,
        "nodata_value": -9999.0,
    }


def output_defaults() -> Dict[str, Any]:
    return {
        "directory": ".",
        "surface_only": False,
        "preview": False,
    }


def merge_settings(a: Dict[str, Any], b: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively overlay ``b`` on top of ``a`` without mutating either."""
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_settings(out[k], v)
        else:
            out[k] = v
    return out


def load_yaml(path) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data
