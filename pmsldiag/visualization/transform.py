#!/usr/bin/env python3

"""
PMSL Viewport Transform

This module provides the affine mapping from geographic coordinates (longitude, y = -latitude) to destination pixels that both layers of a sea-level pressure map share. The raster is drawn as an image stretched over the destination rectangle, so grid cell (i, j) covers a pixel-sized block and its coordinate sits at the centre of that block, not at its top-left corner. The transform therefore spans one cell less than the rectangle and starts half a cell in: (lon_min, y_min) lands on dest.pos + pixel/2 and (lon_max, y_max) on dest.corner - pixel/2, where pixel = dest.size / (grid_w, grid_h). Without that half-cell correction the coastlines drift half a grid cell away from the raster at every zoom level. An axis with zero geographic span (single-row or single-column field) gets scale 0 and collapses onto the half-cell position instead of dividing by zero.

Classes:
    ViewportTransform: Immutable axis-aligned scale-and-translate mapping.

Functions:
    fit_destination_rect: Largest aspect-preserving rectangle of a grid centred in a window.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import numpy as np
from dataclasses import dataclass
from matplotlib.transforms import Affine2D
from typing import Tuple, Union

from ..processing.utils_geog import GeoExtent, Rect


@dataclass(frozen=True)
class ViewportTransform:
    """
    Mapping (x, y) -> (sx * x + tx, sy * y + ty) from geographic to pixel space.
    """
    sx: float
    sy: float
    tx: float
    ty: float

    @staticmethod
    def _scale(extent_px: float, pixel: float, span: float) -> float:
        if span == 0.0:
            return 0.0
        return (extent_px - pixel) / span

    @classmethod
    def derive_from_bounds(cls, lon_min: float, lon_max: float,
                           y_min: float, y_max: float,
                           grid_w: int, grid_h: int,
                           dest_rect: Rect) -> 'ViewportTransform':
        """
        Derive the transform from explicit geographic bounds in the y = -latitude convention. This is the form the overlay draw uses, receiving the bounds of the loaded field every frame together with the current destination rectangle.

        Parameters:
            lon_min, lon_max (float): Longitude bounds of the grid coordinates.
            y_min, y_max (float): Bounds of -latitude (y_min = -lat_max).
            grid_w, grid_h (int): Grid size in cells (image pixels).
            dest_rect (Rect): Destination rectangle in screen pixels.

        Returns:
            ViewportTransform: Transform placing grid coordinates on cell centres.

        Raises:
            ValueError: If the grid size is not positive.
        """
        if grid_w <= 0 or grid_h <= 0:
            raise ValueError(f"Grid size must be positive, got {grid_w} x {grid_h}")

        pixel_x = dest_rect.w / grid_w
        pixel_y = dest_rect.h / grid_h

        sx = cls._scale(dest_rect.w, pixel_x, lon_max - lon_min)
        sy = cls._scale(dest_rect.h, pixel_y, y_max - y_min)

        tx = dest_rect.x + pixel_x * 0.5 - lon_min * sx
        ty = dest_rect.y + pixel_y * 0.5 - y_min * sy

        return cls(float(sx), float(sy), float(tx), float(ty))

    @classmethod
    def derive(cls, extent: GeoExtent, grid_w: int, grid_h: int,
               dest_rect: Rect) -> 'ViewportTransform':
        """
        Derive the transform for a field extent and destination rectangle.

        Parameters:
            extent (GeoExtent): Extent of the loaded field.
            grid_w, grid_h (int): Grid size in cells.
            dest_rect (Rect): Destination rectangle in screen pixels.

        Returns:
            ViewportTransform: Transform shared by raster and vector layers.
        """
        return cls.derive_from_bounds(extent.lon_min, extent.lon_max,
                                      extent.y_min, extent.y_max,
                                      grid_w, grid_h, dest_rect)

    @property
    def max_scaling(self) -> float:
        """Largest absolute axis scale, the display magnification of geographic units."""
        return max(abs(self.sx), abs(self.sy))

    def apply(self, points: Union[np.ndarray, Tuple[float, float]]) -> np.ndarray:
        """
        Map points from geographic to pixel space.

        Parameters:
            points (Union[np.ndarray, Tuple[float, float]]): A single (x, y) pair or an (N, 2) array.

        Returns:
            np.ndarray: Transformed points with the input's shape.
        """
        pts = np.asarray(points, dtype=np.float64)
        out = np.empty_like(pts)
        out[..., 0] = pts[..., 0] * self.sx + self.tx
        out[..., 1] = pts[..., 1] * self.sy + self.ty
        return out

    def to_affine(self) -> Affine2D:
        """Return the transform as a matplotlib Affine2D."""
        return Affine2D().scale(self.sx, self.sy).translate(self.tx, self.ty)


def fit_destination_rect(window_w: float, window_h: float,
                         grid_w: int, grid_h: int) -> Rect:
    """
    Compute the destination rectangle for a grid image drawn as large as possible inside a window while keeping its aspect ratio, centred in the window. The scale is min(window_w / grid_w, window_h / grid_h).

    Parameters:
        window_w, window_h (float): Window size in pixels.
        grid_w, grid_h (int): Grid size in cells.

    Returns:
        Rect: Destination rectangle in window pixels.
    """
    if grid_w <= 0 or grid_h <= 0:
        raise ValueError(f"Grid size must be positive, got {grid_w} x {grid_h}")

    scale = min(window_w / grid_w, window_h / grid_h)
    draw_w = grid_w * scale
    draw_h = grid_h * scale

    return Rect(window_w * 0.5 - draw_w * 0.5, window_h * 0.5 - draw_h * 0.5, draw_w, draw_h)
