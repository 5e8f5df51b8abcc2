#!/usr/bin/env python3

"""
PMSL Unit Conversion Utilities

This module provides unit conversion functionality for sea-level pressure data following the meteorological conventions used by reanalysis products such as ERA5. Pressure in the source files is stored in Pascal, while maps and colour scales are read in hectopascal, so the loader converts once at load time and every downstream component works in display-ready units. The UnitConverter class handles numpy arrays, xarray DataArrays and scalar values while preserving the input structure, and normalizes the many spellings of pressure units found in netCDF attributes ('Pa', 'pascal', 'hectopascal', 'mbar', ...) to canonical strings before looking up a conversion.

Classes:
    UnitConverter: Static utility class providing pressure unit conversion methods with support for multiple data types and unit notation variants.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import numpy as np
import xarray as xr
from typing import Optional, Union

from .constants import PA, HPA, MB, NOUNIT, PA_TO_HPA


class UnitConverter:
    """
    Unit conversion utility class for atmospheric pressure data. The conversion table covers Pascal, hectopascal and millibar in both directions; hectopascal and millibar are numerically identical. Conversions from Pascal multiply by the factor 0.01 rather than dividing by 100 so that loaded values match the reference implementation bit for bit.
    """

    _SYNONYMS = {
        'pa': PA,
        'pascal': PA,
        'pascals': PA,
        'hpa': HPA,
        'hectopascal': HPA,
        'hectopascals': HPA,
        'mb': MB,
        'mbar': MB,
        'millibar': MB,
        'millibars': MB,
    }

    @staticmethod
    def convert_units(data: Union[np.ndarray, xr.DataArray, float],
                      from_unit: str,
                      to_unit: str) -> Union[np.ndarray, xr.DataArray, float]:
        """
        Convert pressure data between Pascal, hectopascal and millibar with automatic handling of multiple data types and unit notation variants. Unit strings are normalized first so 'Pascal', 'pa' and 'Pa' are treated alike. When source and target normalize to the same unit the input object is returned unchanged.

        Parameters:
            data (Union[np.ndarray, xr.DataArray, float]): Numeric data to convert.
            from_unit (str): Source unit string using canonical or synonym notation.
            to_unit (str): Target unit string using canonical or synonym notation.

        Returns:
            Union[np.ndarray, xr.DataArray, float]: Converted data in the same structure and type as the input.

        Raises:
            ValueError: If the requested conversion pair is not supported.
        """
        from_unit = UnitConverter._normalize_unit_string(from_unit)
        to_unit = UnitConverter._normalize_unit_string(to_unit)

        if from_unit == to_unit:
            return data

        conversion_map = {
            (PA, HPA): lambda x: x * PA_TO_HPA,
            (HPA, PA): lambda x: x / PA_TO_HPA,
            (PA, MB): lambda x: x * PA_TO_HPA,
            (MB, PA): lambda x: x / PA_TO_HPA,
            (HPA, MB): lambda x: x,
            (MB, HPA): lambda x: x,
        }

        conversion_key = (from_unit, to_unit)

        if conversion_key not in conversion_map:
            raise ValueError(f"Conversion from '{from_unit}' to '{to_unit}' is not supported.\n"
                             f"Supported conversions: {list(conversion_map.keys())}")

        return conversion_map[conversion_key](data)

    @staticmethod
    def _normalize_unit_string(unit: Optional[str]) -> str:
        """
        Map a unit string from a netCDF attribute to its canonical form. Unknown strings are returned stripped but otherwise untouched so that the caller's error message shows what the file actually contained.

        Parameters:
            unit (Optional[str]): Raw unit string, may be None.

        Returns:
            str: Canonical unit string, or NOUNIT for None/empty input.
        """
        if unit is None:
            return NOUNIT
        key = str(unit).strip()
        return UnitConverter._SYNONYMS.get(key.lower(), key)

    @staticmethod
    def to_hectopascal(data: Union[np.ndarray, xr.DataArray, float],
                       units: Optional[str]) -> Union[np.ndarray, xr.DataArray, float]:
        """
        Convert pressure data to hectopascal for display. A missing or empty units attribute is treated as Pascal, which is what ERA5 mean sea-level pressure files use.

        Parameters:
            data (Union[np.ndarray, xr.DataArray, float]): Pressure values.
            units (Optional[str]): Units attribute read from the source variable.

        Returns:
            Union[np.ndarray, xr.DataArray, float]: Values in hPa.
        """
        source_units = UnitConverter._normalize_unit_string(units) or PA
        return UnitConverter.convert_units(data, source_units, HPA)
