#!/usr/bin/env python3

"""
PMSL Data Validation Utilities

This module provides data validation functionality for gridded sea-level pressure fields through quick quality checks performed while a field is loaded. It includes validation of latitude/longitude axes against geographic bounds, a statistical summary of the scalar grid (finite fraction, min, max, mean) with optional threshold checks, and the colour check used by the configuration. The grid validators never raise: they return a boolean or a result dictionary that the loader reports through the logger, so an unusual but readable file still renders while its oddities show up in the log.

Classes:
    DataValidator: Static utility class providing validation methods for coordinate axes and numerical grid data.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import numpy as np
from typing import Dict, Any, Optional, Sequence, Tuple


class DataValidator:
    """
    Data validation utilities for coordinate axes and gridded values with lightweight sanity checking. All methods are stateless static methods suitable for large arrays.
    """

    @staticmethod
    def validate_axes(lats: np.ndarray, lons: np.ndarray) -> bool:
        """
        Validate 1-D latitude and longitude axes of a regular grid for geographic correctness. Unlike scattered-point coordinates the two axes may differ in length; each must contain only finite values, latitude must lie within [-90, 90] and longitude within [-180, 360] to accept both the [-180, 180] and the [0, 360] conventions.

        Parameters:
            lats (np.ndarray): Latitude axis in degrees North.
            lons (np.ndarray): Longitude axis in degrees East.

        Returns:
            bool: True if both axes pass every check, False otherwise.
        """
        lats = np.asarray(lats)
        lons = np.asarray(lons)

        if lats.size == 0 or lons.size == 0:
            return False

        if not (np.all(np.isfinite(lats)) and np.all(np.isfinite(lons))):
            return False

        if not (-90 <= np.min(lats) and np.max(lats) <= 90):
            return False

        if not (-180 <= np.min(lons) and np.max(lons) <= 360):
            return False

        return True

    @staticmethod
    def validate_data_array(data: np.ndarray,
                            min_val: Optional[float] = None,
                            max_val: Optional[float] = None) -> Dict[str, Any]:
        """
        Perform validation and statistical summary of a numerical grid with optional threshold checking. Non-finite values (NaN from decoded fill values, Inf) are counted as missing and excluded from the statistics. Values outside the optional thresholds, an all-missing grid and a constant grid are reported as issues.

        Parameters:
            data (np.ndarray): Numerical data array, any shape.
            min_val (Optional[float]): Reports an issue if the observed minimum is below this value (default: None).
            max_val (Optional[float]): Reports an issue if the observed maximum is above this value (default: None).

        Returns:
            dict: Dictionary with 'valid' (bool), 'issues' (list of str) and 'stats' (dict with total_points, finite_points, finite_percentage and, when any value is finite, min, max, mean, std).
        """
        results: Dict[str, Any] = {
            "valid": True,
            "issues": [],
            "stats": {}
        }

        data = np.asarray(data)
        finite_mask = np.isfinite(data)
        finite_count = int(np.sum(finite_mask))
        total_count = int(data.size)

        results["stats"]["total_points"] = total_count
        results["stats"]["finite_points"] = finite_count
        results["stats"]["finite_percentage"] = (finite_count / total_count) * 100 if total_count else 0.0

        if finite_count == 0:
            results["valid"] = False
            results["issues"].append("No finite values found")
            return results

        finite_data = data[finite_mask]

        results["stats"]["min"] = float(np.min(finite_data))
        results["stats"]["max"] = float(np.max(finite_data))
        results["stats"]["mean"] = float(np.mean(finite_data))
        results["stats"]["std"] = float(np.std(finite_data))

        if min_val is not None and results["stats"]["min"] < min_val:
            results["issues"].append(f"Minimum value {results['stats']['min']:.2f} below expected {min_val}")

        if max_val is not None and results["stats"]["max"] > max_val:
            results["issues"].append(f"Maximum value {results['stats']['max']:.2f} above expected {max_val}")

        if results["stats"]["min"] == results["stats"]["max"]:
            results["issues"].append("All values are identical")

        if results["issues"]:
            results["valid"] = False

        return results

    @staticmethod
    def validate_color(color: Sequence[float]) -> Tuple[float, ...]:
        """
        Validate an RGB or RGBA colour given as floats in [0, 1] and return it as a tuple. Unlike the grid checks this raises, since a bad colour is a configuration error rather than a data oddity. Lists are accepted because configuration files store colours as lists.

        Parameters:
            color (Sequence[float]): Three or four channel values.

        Returns:
            Tuple[float, ...]: The colour as a tuple of floats.

        Raises:
            ValueError: If the colour has the wrong length or a channel outside [0, 1].
        """
        try:
            channels = tuple(float(c) for c in color)
        except (TypeError, ValueError):
            raise ValueError(f"Colour must be a sequence of numbers, got {color!r}") from None

        if len(channels) not in (3, 4):
            raise ValueError(f"Colour must have 3 or 4 channels, got {len(channels)}")

        if any(not 0.0 <= c <= 1.0 for c in channels):
            raise ValueError(f"Colour channels must lie in [0, 1], got {channels}")

        return channels
