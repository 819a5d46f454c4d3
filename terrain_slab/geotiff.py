import os

import numpy as np
import rasterio

from .elevation import Elevation, ElevationGrid

# Import the console output system
from .console import output


class GeoTiff(Elevation):
    def __init__(self, path, band=1, nodata_value=-9999.0):
        super().__init__()
        self.path = str(path)
        self.band = int(band)
        # Written into masked / NaN cells; must fall at or below the cutoff once scaled
        self.nodata_value = float(nodata_value)

    def get_elevation(self) -> ElevationGrid:
        """
        Read one band of a local GeoTIFF as an elevation grid.

        Returns:
            ElevationGrid: row-major samples, first raster row first

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the band is not present in the file
        """
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"GeoTIFF not found: {self.path}")

        output.progress_info(f"Reading elevation band {self.band} from {os.path.basename(self.path)}")

        with rasterio.open(self.path) as ds:
            if self.band < 1 or self.band > ds.count:
                raise ValueError(
                    f"Band {self.band} not available in '{self.path}' ({ds.count} band(s))"
                )
            masked = ds.read(self.band, masked=True)

        elevation_data = np.ma.filled(masked.astype(np.float64), self.nodata_value)
        nodata_cells = int(np.count_nonzero(np.ma.getmaskarray(masked)))

        # Float rasters may carry NaN without declaring a nodata value
        nan_cells = np.isnan(elevation_data)
        if nan_cells.any():
            nodata_cells += int(np.count_nonzero(nan_cells))
            elevation_data = np.where(nan_cells, self.nodata_value, elevation_data)

        height, width = elevation_data.shape
        output.success(f"  Extracted elevation data shape: {elevation_data.shape}")
        if nodata_cells:
            output.info(f"  Replaced {nodata_cells:,} no-data cells with {self.nodata_value}")

        return ElevationGrid(width=int(width), height=int(height), samples=elevation_data.reshape(-1))
