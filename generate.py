#!/usr/bin/env python3

"""
Printable slab generator driven by a YAML configuration or a single GeoTIFF.

Usage:
  python generate.py --config configs/example.yaml
  python generate.py --config configs/example.yaml --job island
  python generate.py --input dem.tif --output out/Scene.stl --depth -20

Config schema (high level):
  - jobs: [ { name, output_prefix, elevation_source, model, output } ]
    or a single job object with the same fields at the root.
"""

from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional

from terrain_slab.config import (
    DEFAULT_OUTPUT_NAME,
    SlabConfig,
    load_yaml,
    merge_settings,
    model_defaults,
    output_defaults,
    source_defaults,
)
from terrain_slab.console import output
from terrain_slab.elevation import ArrayElevation, Elevation, ElevationGrid
from terrain_slab.slabgenerator import SlabGenerator, SlabResult


class InlineElevation(Elevation):
    """Samples given directly in the job definition."""

    def __init__(self, width: int, height: int, samples: List[float]):
        self.width = int(width)
        self.height = int(height)
        self.samples = list(samples)

    def get_elevation(self) -> ElevationGrid:
        return ElevationGrid.from_samples(self.width, self.height, self.samples)


def _as_jobs(config: Dict[str, Any]) -> List[Dict[str, Any]]:
    # Support either top-level jobs list or a single job object at root
    if isinstance(config.get("jobs"), list):
        return config["jobs"]
    else:
        # treat the whole doc as a single job definition
        return [config]


def _build_elevation_source(job_cfg: Dict[str, Any]) -> Elevation:
    es = merge_settings(source_defaults(), job_cfg.get("elevation_source", {}) or {})
    src_type = str(es.get("type", "geotiff")).lower()

    if src_type == "geotiff":
        file_name = es.get("file")
        if not file_name:
            raise ValueError("elevation_source.file is required for type 'geotiff'")
        from terrain_slab.geotiff import GeoTiff

        return GeoTiff(file_name, band=int(es["band"]), nodata_value=float(es["nodata_value"]))
    elif src_type == "inline":
        try:
            return InlineElevation(es["width"], es["height"], es["samples"])
        except KeyError as exc:
            raise ValueError(f"elevation_source.{exc.args[0]} is required for type 'inline'") from exc
    elif src_type == "array":
        if "data" not in es:
            raise ValueError("elevation_source.data is required for type 'array'")
        return ArrayElevation(es["data"])
    else:
        raise ValueError(f"Unknown elevation_source.type: {src_type}")


def run_job(
    job_cfg: Dict[str, Any],
    global_output_dir: Optional[str] = None,
    only_prefix: Optional[str] = None,
) -> Optional[SlabResult]:
    # Basic required fields
    name = str(job_cfg.get("name") or job_cfg.get("output_prefix") or "job")
    prefix = str(job_cfg.get("output_prefix") or name)
    if only_prefix and (prefix != only_prefix and name != only_prefix):
        return None

    model_cfg = merge_settings(model_defaults(), job_cfg.get("model", {}))
    output_cfg = merge_settings(output_defaults(), job_cfg.get("output", {}))
    config = SlabConfig.from_dict(model_cfg)

    output.header(f"Generating: {name}", f"Output prefix: {prefix}")

    source = _build_elevation_source(job_cfg)
    generator = SlabGenerator(config)
    result = generator.generate_from_source(source)

    out_dir = str(global_output_dir or output_cfg.get("directory") or ".")
    if not os.path.exists(out_dir):
        os.makedirs(out_dir, exist_ok=True)

    stl_path = os.path.join(out_dir, f"{prefix}.stl")
    generator.export_stl(result, stl_path, surface_only=bool(output_cfg.get("surface_only", False)))

    if bool(output_cfg.get("preview", False)):
        from terrain_slab.scene import export_preview

        preview_path = export_preview(result, os.path.join(out_dir, f"{prefix}_preview.glb"))
        output.file_saved(preview_path, "preview")

    output.success(f"Completed: {name}")
    return result


def _job_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    out_path = args.output or DEFAULT_OUTPUT_NAME
    prefix = os.path.splitext(os.path.basename(out_path))[0] or "Scene"
    model: Dict[str, Any] = {}
    if args.elevation_scale is not None:
        model["elevation_scale"] = args.elevation_scale
    if args.cutoff is not None:
        model["no_data_cutoff"] = args.cutoff
    if args.depth is not None:
        model["extrusion_depth"] = args.depth
    if args.solid_name is not None:
        model["solid_name"] = args.solid_name
    return {
        "name": prefix,
        "output_prefix": prefix,
        "elevation_source": {"type": "geotiff", "file": args.input, "band": args.band},
        "model": model,
        "output": {
            "directory": os.path.dirname(out_path) or ".",
            "surface_only": bool(args.surface_only),
            "preview": bool(args.preview),
        },
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a printable slab (ASCII STL) from elevation data")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--config", help="Path to YAML configuration file")
    source.add_argument("--input", help="GeoTIFF to convert directly")

    parser.add_argument("--job", help="Run only the named job (matches name or output_prefix)")
    parser.add_argument("--outdir", help="Override output directory for all jobs")

    # Direct-run options (ignored with --config)
    parser.add_argument("--output", help=f"Output STL path (default: {DEFAULT_OUTPUT_NAME})")
    parser.add_argument("--band", type=int, default=1, help="Raster band holding elevation (default: 1)")
    parser.add_argument("--elevation-scale", type=float, help="Multiplier from sample to model height (default: 1/48)")
    parser.add_argument("--cutoff", type=float, help="Scaled heights at or below this are no-data (default: -1)")
    parser.add_argument("--depth", type=float, help="Base extrusion depth along Z (default: -16)")
    parser.add_argument("--solid-name", help="Name written in the STL header (default: Scene)")
    parser.add_argument("--surface-only", action="store_true", help="Export the surface without the base")
    parser.add_argument("--preview", action="store_true", help="Also write a GLB preview next to the STL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.input:
        jobs = [_job_from_args(args)]
    else:
        try:
            cfg = load_yaml(args.config)
        except (OSError, ValueError) as exc:
            output.error(f"Could not read configuration: {exc}")
            return 2
        jobs = _as_jobs(cfg)

    if not jobs:
        output.error("No jobs found in configuration")
        return 2

    ran = 0
    for job in jobs:
        try:
            result = run_job(job, global_output_dir=args.outdir, only_prefix=args.job)
        except Exception as exc:
            output.error(f"Job failed: {exc}")
            return 1
        if result is not None:
            ran += 1
            output.print_section_divider()

    if not ran:
        output.warning(f"No job matched '{args.job}'; nothing was generated")
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
