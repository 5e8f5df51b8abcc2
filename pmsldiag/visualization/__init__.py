#!/usr/bin/env python3

"""
PMSL Visualization Package

This package provides the raster, vector overlay and presentation layers of
sea-level pressure maps.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

__version__ = "1.0.0"

from pmsldiag.visualization.styling import PaletteId, PMSLVisualizationStyle, get_palette
from pmsldiag.visualization.raster import ColorMapper
from pmsldiag.visualization.transform import ViewportTransform, fit_destination_rect
from pmsldiag.visualization.overlay import (
    PolygonFeature,
    CoastlineOverlay,
    read_geojson_features,
    read_natural_earth_features
)
from pmsldiag.visualization.base_visualizer import PMSLVisualizer
from pmsldiag.visualization.session import RenderSession

__all__ = [
    'PaletteId',
    'PMSLVisualizationStyle',
    'get_palette',
    'ColorMapper',
    'ViewportTransform',
    'fit_destination_rect',
    'PolygonFeature',
    'CoastlineOverlay',
    'read_geojson_features',
    'read_natural_earth_features',
    'PMSLVisualizer',
    'RenderSession'
]
