#!/usr/bin/env python3

"""
PMSL Scalar Field Data Model and Loader

This module provides the data model for the gridded field that a rendering session displays and the loader that reads it from a netCDF file. It implements the ScalarField dataclass, an immutable container of a 2-D grid of physical values indexed [row][col] (row = latitude index, col = longitude index) together with its latitude and longitude axes, and the PMSLFieldLoader class that opens the source with xarray, checks that the latitude axis, longitude axis and scalar variable are present and consistently shaped, selects a single 2-D slice (index 0 along every leading time/level dimension), and converts Pascal to hectopascal during load so the stored values are always display-ready. Failures are reported with the pmsldiag error taxonomy (MissingVariableError, ReadError, EmptyAxisError) and abort the load immediately.

Classes:
    ScalarField: Immutable 2-D scalar grid with coordinate axes.
    PMSLFieldLoader: Reader producing a ScalarField from a netCDF file or an open xarray Dataset.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import os
import logging
import numpy as np
import xarray as xr
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .constants import (
    HPA, LATITUDE_VARIABLE, LONGITUDE_VARIABLE, PMSL_VARIABLE
)
from .exceptions import EmptyAxisError, MissingVariableError, ReadError
from .utils_unit import UnitConverter
from .utils_validator import DataValidator

logger = logging.getLogger(__name__)

_READ_FAILURES = (OSError, RuntimeError, ValueError, TypeError)


@dataclass(frozen=True, eq=False)
class ScalarField:
    """
    Immutable 2-D grid of physical values with its coordinate axes.

    Attributes:
        values (np.ndarray): float64 grid of shape (len(lats), len(lons)).
        lats (np.ndarray): Latitude axis in degrees, one entry per row.
        lons (np.ndarray): Longitude axis in degrees, one entry per column.
        variable (str): Name of the source variable.
        units (str): Units of ``values`` (hPa after loading).
    """
    values: np.ndarray
    lats: np.ndarray
    lons: np.ndarray
    variable: str = PMSL_VARIABLE
    units: str = HPA

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        lats = np.array(self.lats, dtype=np.float64)
        lons = np.array(self.lons, dtype=np.float64)

        if values.ndim != 2:
            raise ReadError(f"Scalar field must be 2-D, got shape {values.shape}")

        if lats.ndim != 1 or lons.ndim != 1:
            raise ReadError("Latitude and longitude axes must be 1-D")

        if values.shape != (lats.size, lons.size):
            raise ReadError(
                f"Grid shape {values.shape} does not match axes "
                f"(latitude={lats.size}, longitude={lons.size})"
            )

        for arr in (values, lats, lons):
            arr.setflags(write=False)

        object.__setattr__(self, 'values', values)
        object.__setattr__(self, 'lats', lats)
        object.__setattr__(self, 'lons', lons)

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width


class PMSLFieldLoader:
    """
    Loader for gridded sea-level pressure fields stored in netCDF files.

    The loader reads only the first 2-D slice of the scalar variable and returns it
    as a ScalarField in hectopascal.
    """

    def __init__(self, variable: str = PMSL_VARIABLE,
                 lat_variable: str = LATITUDE_VARIABLE,
                 lon_variable: str = LONGITUDE_VARIABLE,
                 verbose: bool = True) -> None:
        """
        Initialize the loader with the names of the three variables a source must provide. The defaults match ERA5 single-level files ('latitude', 'longitude', 'msl'). Verbose mode adds the grid statistics summary to the log at INFO level; otherwise it is logged at DEBUG level.

        Parameters:
            variable (str): Name of the scalar field variable (default: 'msl').
            lat_variable (str): Name of the latitude axis variable (default: 'latitude').
            lon_variable (str): Name of the longitude axis variable (default: 'longitude').
            verbose (bool): Log load summaries at INFO level (default: True).

        Returns:
            None
        """
        self.variable = variable
        self.lat_variable = lat_variable
        self.lon_variable = lon_variable
        self.verbose = verbose

    def load(self, source: Union[str, os.PathLike, xr.Dataset]) -> ScalarField:
        """
        Load a ScalarField from a netCDF file path or an already open xarray Dataset. The file is opened with xarray's default netCDF backend and closed again before returning; only the selected 2-D slice of the scalar variable is read into memory. Loading the same source twice yields bit-identical field contents.

        Parameters:
            source (Union[str, os.PathLike, xr.Dataset]): Path to the netCDF file or an open dataset.

        Returns:
            ScalarField: Loaded field in hectopascal.

        Raises:
            MissingVariableError: If any of the three required variables is absent.
            ReadError: If the file cannot be opened or read, or shapes are inconsistent.
            EmptyAxisError: If the latitude or longitude axis is empty.
        """
        if isinstance(source, xr.Dataset):
            return self._extract_field(source, "<dataset>")

        path = os.fspath(source)

        if not os.path.exists(path):
            raise ReadError(f"Input file not found: {path}")

        try:
            dataset = xr.open_dataset(path)
        except _READ_FAILURES as e:
            raise ReadError(f"Could not open {path}: {e}") from e

        with dataset:
            return self._extract_field(dataset, path)

    def _read_axis(self, dataset: xr.Dataset, name: str, label: str) -> np.ndarray:
        axis = dataset[name]

        if axis.ndim != 1:
            raise ReadError(f"Axis variable '{name}' in {label} must be 1-D, got dims {axis.dims}")

        try:
            values = np.asarray(axis.values, dtype=np.float64)
        except _READ_FAILURES as e:
            raise ReadError(f"Failed to read '{name}' from {label}: {e}") from e

        if values.size == 0:
            raise EmptyAxisError(name)

        return values

    def _extract_field(self, dataset: xr.Dataset, label: str) -> ScalarField:
        """
        Validate the dataset contents and build the ScalarField. Variables are looked up among both coordinates and data variables. The scalar variable must have at least two dimensions whose trailing pair matches the (latitude, longitude) axis lengths and dimension names; every leading dimension is indexed at 0.

        Parameters:
            dataset (xr.Dataset): Open dataset to read from.
            label (str): Source description used in error and log messages.

        Returns:
            ScalarField: Loaded field in hectopascal.
        """
        required = (self.lat_variable, self.lon_variable, self.variable)
        missing = [name for name in required if name not in dataset.variables]

        if missing:
            raise MissingVariableError(missing, source=label)

        lats = self._read_axis(dataset, self.lat_variable, label)
        lons = self._read_axis(dataset, self.lon_variable, label)

        field_da = dataset[self.variable]

        if field_da.ndim < 2:
            raise ReadError(
                f"Variable '{self.variable}' in {label} must have at least 2 dimensions, got {field_da.dims}"
            )

        if tuple(field_da.shape[-2:]) != (lats.size, lons.size):
            raise ReadError(
                f"Variable '{self.variable}' trailing shape {tuple(field_da.shape[-2:])} does not match "
                f"axes (latitude={lats.size}, longitude={lons.size}) in {label}"
            )

        expected_dims = (dataset[self.lat_variable].dims[0], dataset[self.lon_variable].dims[0])

        if tuple(field_da.dims[-2:]) != expected_dims:
            raise ReadError(
                f"Variable '{self.variable}' trailing dimensions {tuple(field_da.dims[-2:])} must be "
                f"{expected_dims} (latitude, longitude) in {label}"
            )

        leading_dims = field_da.dims[:-2]
        empty_dims = [dim for dim in leading_dims if field_da.sizes[dim] == 0]

        if empty_dims:
            raise ReadError(f"Variable '{self.variable}' has empty leading dimension(s) {empty_dims} in {label}")

        slice_da = field_da.isel({dim: 0 for dim in leading_dims}) if leading_dims else field_da

        if leading_dims:
            logger.debug(f"Selected slice {self._describe_slice(slice_da, leading_dims)} of '{self.variable}'")

        try:
            raw = np.asarray(slice_da.values, dtype=np.float64)
        except _READ_FAILURES as e:
            raise ReadError(f"Failed to read '{self.variable}' from {label}: {e}") from e

        source_units = field_da.attrs.get('units')

        try:
            values = UnitConverter.to_hectopascal(raw, source_units)
        except ValueError as e:
            raise ReadError(f"Variable '{self.variable}' has unsupported units '{source_units}': {e}") from e

        field = ScalarField(values=values, lats=lats, lons=lons, variable=self.variable, units=HPA)
        self._report(field, label)
        return field

    @staticmethod
    def _describe_slice(slice_da: xr.DataArray, leading_dims: Tuple[Any, ...]) -> Dict[str, Any]:
        selected: Dict[str, Any] = {}
        for dim in leading_dims:
            if dim in slice_da.coords:
                selected[str(dim)] = str(slice_da.coords[dim].values)
            else:
                selected[str(dim)] = 0
        return selected

    def _report(self, field: ScalarField, label: str) -> None:
        log = logger.info if self.verbose else logger.debug
        log(f"Loaded '{field.variable}' from {label}: {field.height} x {field.width} grid ({field.units})")

        if not DataValidator.validate_axes(field.lats, field.lons):
            logger.warning(f"Coordinate axes in {label} fall outside expected geographic bounds")

        summary = DataValidator.validate_data_array(field.values)
        stats = summary["stats"]

        if "min" in stats:
            log(f"{field.variable} min: {stats['min']:.2f} {field.units}  max: {stats['max']:.2f} {field.units}  "
                f"finite: {stats['finite_percentage']:.1f}%")

        for issue in summary["issues"]:
            logger.warning(f"{field.variable}: {issue}")
