#!/usr/bin/env python3

"""
PMSL Render Session

This module ties the loader, the range diagnostics, the colour mapper and the coastline overlay into one explicit session object. RenderSession.load() runs the load sequence exactly once (field, normalization range, raster image, geographic extent, overlay) and aborts on the first error, so a session either holds every layer or does not exist. Afterwards the session is read-only: draw_frame() only lays out the destination rectangle for the current window size, blits the cached image and strokes the overlay through the transform derived for that rectangle, which makes it suitable as the per-frame callback of an interactive window.

Classes:
    RenderSession: Loaded layers of a map together with the per-frame drawing routine.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import logging
import numpy as np
from typing import Any, Optional

from ..diagnostics.pressure import NormalizationRange, PressureRangeDiagnostics
from ..processing.base import PMSLFieldLoader, ScalarField
from ..processing.utils_config import PMSLConfig
from ..processing.utils_geog import GeoExtent, PMSLGeographicUtils, Rect
from ..processing.utils_monitor import PerformanceMonitor
from .overlay import CoastlineOverlay, read_geojson_features, read_natural_earth_features
from .raster import ColorMapper
from .transform import fit_destination_rect

logger = logging.getLogger(__name__)


class RenderSession:
    """
    A loaded sea-level pressure map: field, range, image, extent and optional overlay.
    """

    def __init__(self, field: ScalarField,
                 value_range: NormalizationRange,
                 image: np.ndarray,
                 extent: GeoExtent,
                 overlay: Optional[CoastlineOverlay] = None) -> None:
        self.field = field
        self.range = value_range
        self.image = image
        self.extent = extent
        self.overlay = overlay

    @classmethod
    def load(cls, config: PMSLConfig,
             monitor: Optional[PerformanceMonitor] = None) -> 'RenderSession':
        """
        Run the load sequence for a configuration. Each stage is timed by the monitor. Any error (missing file, missing variable, empty axis, unreadable coastline file) propagates to the caller and no session is created.

        Parameters:
            config (PMSLConfig): Session configuration.
            monitor (Optional[PerformanceMonitor]): Stage timer (default: a new monitor).

        Returns:
            RenderSession: Fully loaded session.
        """
        if monitor is None:
            monitor = PerformanceMonitor()

        loader = PMSLFieldLoader(variable=config.variable,
                                 lat_variable=config.lat_variable,
                                 lon_variable=config.lon_variable,
                                 verbose=config.verbose)

        with monitor.timer("Field load"):
            field = loader.load(config.input_file)

        with monitor.timer("Range computation"):
            diagnostics = PressureRangeDiagnostics(floor=config.floor_threshold, verbose=config.verbose)
            value_range = diagnostics.compute_range(field)

        with monitor.timer("Raster rendering"):
            image = ColorMapper.render(field, value_range, config.palette)

        extent = PMSLGeographicUtils.compute_extent(field.lats, field.lons)
        logger.debug(f"Field extent: lon [{extent.lon_min}, {extent.lon_max}], lat [{extent.lat_min}, {extent.lat_max}]")

        with monitor.timer("Overlay load"):
            overlay = cls._load_overlay(config, field, extent)

        return cls(field, value_range, image, extent, overlay)

    @staticmethod
    def _load_overlay(config: PMSLConfig, field: ScalarField,
                      extent: GeoExtent) -> Optional[CoastlineOverlay]:
        if config.coastline_source == "none":
            logger.info("Coastline overlay disabled")
            return None

        if config.coastline_source == "natural_earth":
            features = read_natural_earth_features(config.natural_earth_resolution)
        else:
            features = read_geojson_features(config.coastline_file)

        return CoastlineOverlay(features, extent.to_rect(),
                                grid_size=(field.width, field.height),
                                color=config.line_color,
                                line_width=config.line_width)

    def draw_frame(self, surface: Any) -> Rect:
        """
        Draw one frame on a surface. The destination rectangle is fitted to the surface's current window size, the cached image is blitted into it and the overlay is drawn with the field's bounds so both layers share one transform.

        Parameters:
            surface (Any): Drawing surface (PMSLVisualizer or compatible).

        Returns:
            Rect: Destination rectangle of this frame.
        """
        surface.begin_frame()

        window_w, window_h = surface.window_size
        dest_rect = fit_destination_rect(window_w, window_h, self.field.width, self.field.height)

        surface.blit_image(self.image, dest_rect)

        if self.overlay is not None:
            self.overlay.draw(surface, dest_rect,
                              self.extent.lon_min, self.extent.lon_max,
                              self.extent.y_min, self.extent.y_max)

        surface.end_frame()
        return dest_rect
