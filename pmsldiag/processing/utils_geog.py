#!/usr/bin/env python3

"""
PMSL Geographic and Spatial Utilities

This module provides the geographic primitives shared by the raster and vector layers of a sea-level pressure map. It implements the Rect value type used both for geographic rectangles and for destination pixel rectangles, the GeoExtent bounding box derived from the latitude and longitude axes of a loaded field, and the PMSLGeographicUtils class with the extent reduction itself. Vector geometry is handled in a y = -latitude convention so that northward maps to a decreasing row index like image rows do; GeoExtent exposes its bounds in that convention through y_min, y_max and to_rect() so every comparison between the field extent and polygon bounds uses the same axis orientation.

Classes:
    Rect: Axis-aligned rectangle with inclusive intersection test.
    GeoExtent: Longitude/latitude bounding box of a loaded scalar field.
    PMSLGeographicUtils: Utility class providing static methods for extent computation.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .exceptions import EmptyAxisError


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle given by its top-left position and size.

    The same type describes destination pixel rectangles (y grows downwards) and
    geographic rectangles in the (longitude, -latitude) convention.
    """
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_bounds(cls, x_min: float, y_min: float, x_max: float, y_max: float) -> 'Rect':
        return cls(float(x_min), float(y_min), float(x_max - x_min), float(y_max - y_min))

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.w, self.h)

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def corner(self) -> Tuple[float, float]:
        """Bottom-right corner (x + w, y + h)."""
        return (self.right, self.bottom)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w * 0.5, self.y + self.h * 0.5)

    def intersects(self, other: 'Rect') -> bool:
        """
        Test whether two rectangles overlap, counting shared edges and corners as an intersection. A zero-width rectangle (a single meridian, for example) still intersects anything it touches.

        Parameters:
            other (Rect): Rectangle to test against.

        Returns:
            bool: True if the closed rectangles share at least one point.
        """
        return (self.x <= other.right and other.x <= self.right and
                self.y <= other.bottom and other.y <= self.bottom)


@dataclass(frozen=True)
class GeoExtent:
    """
    Geographic bounding box of a scalar field in degrees.

    Attributes:
        lon_min, lon_max (float): Longitude bounds, lon_min <= lon_max.
        lat_min, lat_max (float): Latitude bounds, lat_min <= lat_max.
    """
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @property
    def y_min(self) -> float:
        """Upper edge in the y = -latitude convention (northernmost latitude)."""
        return -self.lat_max

    @property
    def y_max(self) -> float:
        """Lower edge in the y = -latitude convention (southernmost latitude)."""
        return -self.lat_min

    def to_rect(self) -> Rect:
        """Return the extent as a Rect in the (longitude, -latitude) convention."""
        return Rect.from_bounds(self.lon_min, self.y_min, self.lon_max, self.y_max)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.lon_min, self.lon_max, self.lat_min, self.lat_max


class PMSLGeographicUtils:
    """
    Geographic utilities class for sea-level pressure map rendering.

    This class provides the reductions that turn coordinate axes into the
    geographic extent used to align the raster and vector layers.
    """

    @staticmethod
    def _axis_bounds(values: Union[Sequence[float], np.ndarray], axis_name: str) -> Tuple[float, float]:
        arr = np.asarray(values, dtype=np.float64).ravel()
        arr = arr[np.isfinite(arr)]

        if arr.size == 0:
            raise EmptyAxisError(axis_name)

        return float(np.min(arr)), float(np.max(arr))

    @staticmethod
    def compute_extent(lats: Union[Sequence[float], np.ndarray],
                       lons: Union[Sequence[float], np.ndarray]) -> GeoExtent:
        """
        Calculate the geographic extent of a field from its latitude and longitude axes as a pure minimum/maximum reduction. Axes are commonly stored north-to-south (ERA5 latitude decreases with row index) so the order of the values is irrelevant; only their extremes are used. Non-finite entries are ignored, and an axis that has no finite entries is reported as empty.

        Parameters:
            lats (Union[Sequence[float], np.ndarray]): Latitude axis values in degrees.
            lons (Union[Sequence[float], np.ndarray]): Longitude axis values in degrees.

        Returns:
            GeoExtent: Bounding box with lon_min <= lon_max and lat_min <= lat_max.

        Raises:
            EmptyAxisError: If either axis is empty.
        """
        lat_min, lat_max = PMSLGeographicUtils._axis_bounds(lats, "latitude")
        lon_min, lon_max = PMSLGeographicUtils._axis_bounds(lons, "longitude")
        return GeoExtent(lon_min=lon_min, lon_max=lon_max, lat_min=lat_min, lat_max=lat_max)
