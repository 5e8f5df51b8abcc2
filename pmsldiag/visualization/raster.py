#!/usr/bin/env python3

"""
PMSL Raster Colour Mapping

This module turns a loaded scalar field into the RGBA image that forms the raster layer of a sea-level pressure map. Every grid cell becomes exactly one pixel (row = latitude index, column = longitude index); no interpolation or resampling happens here, the presentation layer scales the finished image into its destination rectangle with nearest-neighbour sampling. Each value is normalized against the (min, max) range as t = (value - min) / (max - min), clamped to [0, 1] and passed through the selected palette. The mapping is total: a degenerate range (max == min) or a non-finite span maps every cell to t = 0, an inverted range (max < min) simply runs the scale backwards before clamping, and non-finite cells become fully transparent pixels.

Classes:
    ColorMapper: Maps a ScalarField and a normalization range to an RGBA image through a palette.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import logging
import numpy as np
from typing import Tuple, Union

from ..processing.base import ScalarField
from .styling import PaletteId, get_palette

logger = logging.getLogger(__name__)

# t assigned to every cell when the range has zero (or non-finite) span.
DEGENERATE_RANGE_T = 0.0

TRANSPARENT = (0, 0, 0, 0)


class ColorMapper:
    """
    Colour mapper producing the raster layer image.

    The mapper is stateless; rendering the same field with the same range and
    palette always returns an identical image.
    """

    @staticmethod
    def normalize(values: np.ndarray, value_range: Tuple[float, float]) -> np.ndarray:
        """
        Normalize values against a (min, max) range and clamp the result to [0, 1]. Non-finite input cells stay NaN so that callers can mask them.

        Parameters:
            values (np.ndarray): Values in the units of the range.
            value_range (Tuple[float, float]): (min, max) pair, may be inverted or degenerate.

        Returns:
            np.ndarray: float64 array of the input shape with t in [0, 1] or NaN.
        """
        vmin, vmax = float(value_range[0]), float(value_range[1])
        data = np.asarray(values, dtype=np.float64)
        span = vmax - vmin

        if span == 0.0 or not np.isfinite(span):
            t = np.full(data.shape, DEGENERATE_RANGE_T, dtype=np.float64)
        else:
            with np.errstate(invalid='ignore', over='ignore'):
                t = (data - vmin) * (1.0 / span)
            t = np.clip(t, 0.0, 1.0)

        t[~np.isfinite(data)] = np.nan
        return t

    @staticmethod
    def render(field: ScalarField,
               value_range: Tuple[float, float],
               palette: Union[str, PaletteId] = PaletteId.TURBO) -> np.ndarray:
        """
        Render a scalar field to an RGBA image with one pixel per grid cell. Values are normalized with normalize() and mapped through the palette; cells without a finite value are written as transparent pixels.

        Parameters:
            field (ScalarField): Loaded field.
            value_range (Tuple[float, float]): Normalization (min, max), usually from PressureRangeDiagnostics.
            palette (Union[str, PaletteId]): Palette identifier (default: turbo).

        Returns:
            np.ndarray: uint8 array of shape (field.height, field.width, 4).
        """
        palette_fn = get_palette(palette)
        t = ColorMapper.normalize(field.values, value_range)

        missing = np.isnan(t)
        image = palette_fn(np.where(missing, 0.0, t))

        if missing.any():
            image[missing] = TRANSPARENT
            logger.debug(f"{int(missing.sum())} non-finite cells rendered transparent")

        if float(value_range[1]) == float(value_range[0]):
            logger.debug(f"Degenerate normalization range; all cells mapped to t={DEGENERATE_RANGE_T}")

        return image
