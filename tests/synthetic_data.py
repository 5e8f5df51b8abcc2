#!/usr/bin/env python3
"""
Synthetic Test Data for PMSLdiag

Helpers shared by the test modules that write small ERA5-like netCDF files and
GeoJSON feature collections into temporary directories.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import os
import json
import numpy as np
import xarray as xr
from typing import Any, Dict, List, Optional, Sequence


def make_pmsl_dataset(values_pa: Optional[np.ndarray] = None,
                      lats: Optional[Sequence[float]] = None,
                      lons: Optional[Sequence[float]] = None,
                      n_times: int = 0,
                      units: Optional[str] = "Pa",
                      variable: str = "msl") -> xr.Dataset:
    """
    Build an ERA5-style dataset with latitude decreasing north to south.

    Parameters:
        values_pa (Optional[np.ndarray]): 2-D grid in Pa (default: smooth 5 x 10 pattern).
        lats, lons (Optional[Sequence[float]]): Axes (default: 40..-40 and 0..90).
        n_times (int): Number of leading time steps, 0 for a plain 2-D variable.
        units (Optional[str]): Units attribute, None to omit it.
        variable (str): Name of the pressure variable.

    Returns:
        xr.Dataset: Dataset holding latitude, longitude and the pressure variable.
    """
    if lats is None:
        lats = np.linspace(40.0, -40.0, 5)
    if lons is None:
        lons = np.linspace(0.0, 90.0, 10)

    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)

    if values_pa is None:
        lon_grid, lat_grid = np.meshgrid(lons, lats)
        values_pa = 101000.0 + 500.0 * np.cos(np.radians(lat_grid)) + 10.0 * lon_grid

    values_pa = np.asarray(values_pa, dtype=np.float64)
    attrs: Dict[str, Any] = {} if units is None else {'units': units}

    if n_times:
        times = (np.datetime64("2024-01-01T00:00") + np.arange(n_times) * np.timedelta64(6, "h")).astype("datetime64[ns]")
        stacked = np.stack([values_pa + 100.0 * i for i in range(n_times)])
        data_vars = {variable: (('time', 'latitude', 'longitude'), stacked, attrs)}
        coords = {'time': times, 'latitude': lats, 'longitude': lons}
    else:
        data_vars = {variable: (('latitude', 'longitude'), values_pa, attrs)}
        coords = {'latitude': lats, 'longitude': lons}

    return xr.Dataset(data_vars, coords=coords)


def write_pmsl_file(directory: str, name: str = "pmsl.nc", **kwargs: Any) -> str:
    """Write make_pmsl_dataset(**kwargs) to a netCDF file and return its path."""
    path = os.path.join(directory, name)
    make_pmsl_dataset(**kwargs).to_netcdf(path)
    return path


def square(lon0: float, lat0: float, size: float) -> List[List[float]]:
    """Closed ring of a lon/lat square with its south-west corner at (lon0, lat0)."""
    return [[lon0, lat0], [lon0 + size, lat0], [lon0 + size, lat0 + size],
            [lon0, lat0 + size], [lon0, lat0]]


def polygon_feature(name: str, *rings: List[List[float]]) -> Dict[str, Any]:
    return {
        'type': 'Feature',
        'properties': {'name': name},
        'geometry': {'type': 'Polygon', 'coordinates': list(rings)}
    }


def multipolygon_feature(name: str, *polygons: List[List[List[float]]]) -> Dict[str, Any]:
    return {
        'type': 'Feature',
        'properties': {'name': name},
        'geometry': {'type': 'MultiPolygon', 'coordinates': list(polygons)}
    }


def write_geojson(directory: str, features: List[Dict[str, Any]],
                  name: str = "countries.geojson") -> str:
    """Write a FeatureCollection and return its path."""
    path = os.path.join(directory, name)
    with open(path, 'w') as f:
        json.dump({'type': 'FeatureCollection', 'features': features}, f)
    return path
