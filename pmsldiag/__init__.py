#!/usr/bin/env python3

"""
PMSLdiag - Sea-Level Pressure Map Rendering Package

A Python package for rendering mean sea-level pressure fields from ERA5-style
netCDF output as colored rasters with national boundary overlays, keeping the
raster and vector layers pixel-aligned at any viewport size.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Rubaiat Islam"
__email__ = "mrislam@ucar.edu"
__institution__ = "Mesoscale & Microscale Meteorology Laboratory, NCAR"

__all__ = [
    '__version__',
    '__author__',
    '__email__',
    '__institution__'
]
