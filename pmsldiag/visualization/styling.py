#!/usr/bin/env python3

"""
PMSL Visualization Styling and Palettes

This module provides the styling utilities shared by the raster and vector layers of a sea-level pressure map. It implements the PaletteId enumeration of the continuous colour palettes a map can be rendered with, the get_palette() lookup returning each palette as a pure function from a normalized value t in [0, 1] to RGBA bytes, and the PMSLVisualizationStyle class with colour validation and the standardized figure saving used by the command-line tools. Palettes are backed by matplotlib's registered colormaps (turbo is the default, matching the perceptually ordered rainbow customary for pressure charts), so the colour mapper stays independent of how a palette is implemented.

Classes:
    PaletteId: Enumerated identifiers of the supported continuous palettes.
    PMSLVisualizationStyle: Styling utility class providing colour validation and figure saving.

Functions:
    get_palette: Return the pure t -> RGBA function of a palette.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import os
import logging
import numpy as np
import matplotlib
import matplotlib.colors as mcolors
from enum import Enum
from matplotlib.figure import Figure
from typing import Callable, List, Sequence, Tuple, Union

from ..processing.utils_validator import DataValidator

logger = logging.getLogger(__name__)

Palette = Callable[[Union[float, np.ndarray]], np.ndarray]


class PaletteId(str, Enum):
    """Continuous palettes available for the raster layer."""
    TURBO = "turbo"
    VIRIDIS = "viridis"
    PLASMA = "plasma"
    INFERNO = "inferno"
    MAGMA = "magma"
    CIVIDIS = "cividis"
    JET = "jet"
    HOT = "hot"
    GRAY = "gray"
    TWILIGHT = "twilight"

    @classmethod
    def parse(cls, value: Union[str, 'PaletteId']) -> 'PaletteId':
        """
        Resolve a palette identifier from its enum member or its name, case-insensitively.

        Raises:
            ValueError: If the name is not a supported palette.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown palette '{value}'. Available palettes: {names}") from None


def get_palette(palette: Union[str, PaletteId]) -> Palette:
    """
    Return a palette as a pure function mapping normalized values to RGBA bytes. The returned function accepts a scalar or an array of any shape, clamps its input to [0, 1] and returns uint8 RGBA with a trailing axis of length 4 (shape (4,) for a scalar). It does not depend on any state besides the palette's fixed colour table.

    Parameters:
        palette (Union[str, PaletteId]): Palette identifier.

    Returns:
        Palette: Function t -> RGBA uint8.
    """
    palette_id = PaletteId.parse(palette)
    cmap = matplotlib.colormaps[palette_id.value]

    def palette_fn(t: Union[float, np.ndarray]) -> np.ndarray:
        clamped = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
        return np.asarray(cmap(clamped, bytes=True), dtype=np.uint8)

    palette_fn.__name__ = f"palette_{palette_id.value}"
    return palette_fn


class PMSLVisualizationStyle:
    """
    Styling utility class for sea-level pressure maps. All methods are static utilities shared by the visualizer, the overlay and the command-line interface.
    """

    @staticmethod
    def validate_color(color: Sequence[float]) -> Tuple[float, ...]:
        """Validate an RGB or RGBA colour in [0, 1]; see DataValidator.validate_color."""
        return DataValidator.validate_color(color)

    @staticmethod
    def to_rgba(color: Sequence[float]) -> Tuple[float, float, float, float]:
        """Return the colour as an RGBA tuple, adding full opacity to RGB input."""
        return mcolors.to_rgba(PMSLVisualizationStyle.validate_color(color))

    @staticmethod
    def save_plot(fig: Figure,
                  output_path: str,
                  formats: List[str] = ['png'],
                  dpi: int = 100) -> List[str]:
        """
        Save a rendered frame to file(s) in one or more output formats. Unlike publication plots the frame is saved without a tight bounding box so that the written image has exactly the pixel size of the window it was drawn for. PNG output uses fast compression (level 1). A path that already carries one of the requested extensions is written as-is.

        Parameters:
            fig (Figure): Matplotlib Figure holding the frame.
            output_path (str): Output file path with or without extension.
            formats (List[str]): Output format list (default: ['png']).
            dpi (int): Output resolution matching the figure's dpi (default: 100).

        Returns:
            List[str]: Paths of the written files.

        Raises:
            ValueError: If figure is None.
        """
        if fig is None:
            raise ValueError("No figure to save. Render a frame first.")

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        _, ext = os.path.splitext(output_path)
        ext = ext.lstrip('.').lower()
        if ext and ext in formats:
            targets = [(output_path, ext)]
        else:
            targets = [(f"{output_path}.{fmt}", fmt) for fmt in formats]

        written = []
        for full_path, fmt in targets:
            save_kwargs = {'dpi': dpi, 'format': fmt, 'facecolor': fig.get_facecolor()}
            if fmt.lower() == 'png':
                save_kwargs['pil_kwargs'] = {'compress_level': 1}
            fig.savefig(full_path, **save_kwargs)
            logger.info(f"Saved plot: {full_path}")
            written.append(full_path)

        return written
