#!/usr/bin/env python3

"""
PMSL Processing Package

This package provides data loading and support utilities for sea-level pressure
rendering including the scalar field loader, unit conversion, geographic extents,
validation, configuration, logging and performance monitoring.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

from .exceptions import PMSLError, MissingVariableError, ReadError, EmptyAxisError
from .base import ScalarField, PMSLFieldLoader
from .utils_unit import UnitConverter
from .utils_geog import Rect, GeoExtent, PMSLGeographicUtils
from .utils_validator import DataValidator
from .utils_config import PMSLConfig
from .utils_logger import PMSLLogger
from .utils_monitor import PerformanceMonitor

__all__ = [
    'PMSLError',
    'MissingVariableError',
    'ReadError',
    'EmptyAxisError',
    'ScalarField',
    'PMSLFieldLoader',
    'UnitConverter',
    'Rect',
    'GeoExtent',
    'PMSLGeographicUtils',
    'DataValidator',
    'PMSLConfig',
    'PMSLLogger',
    'PerformanceMonitor'
]
