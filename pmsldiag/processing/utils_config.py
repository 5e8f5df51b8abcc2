#!/usr/bin/env python3

"""
PMSL Configuration Management Utilities

This module provides configuration management for sea-level pressure map rendering including parameter validation, YAML file I/O and centralized settings storage. It implements the PMSLConfig dataclass that holds every parameter of a rendering session (input file and variable names, coastline source, palette, floor threshold, window geometry, colours, output and logging options) with defaults matching the reference ERA5 setup: a 600 x 600 window, a slate-blue background, near-black semi-transparent boundary lines and the turbo palette. Configurations can be saved to and loaded from YAML files and are merged with command-line arguments by the unified CLI, explicit arguments taking precedence over file values. All parameters are validated on construction so that a bad configuration file fails before any data is read.

Classes:
    PMSLConfig: Centralized configuration dataclass for PMSL rendering with validation and file I/O capabilities.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import yaml
import logging
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, asdict, fields

from .constants import (
    COASTLINE_SOURCES, DEFAULT_BACKGROUND_COLOR, DEFAULT_COASTLINE_FILE,
    DEFAULT_INPUT_FILE, DEFAULT_LINE_COLOR, DEFAULT_LINE_WIDTH, DEFAULT_PALETTE,
    DEFAULT_WINDOW_SIZE, FLOOR_THRESHOLD_HPA, LATITUDE_VARIABLE, LONGITUDE_VARIABLE,
    NATURAL_EARTH_RESOLUTIONS, PALETTE_NAMES, PMSL_VARIABLE,
)
from .utils_validator import DataValidator

logger = logging.getLogger(__name__)

_COLOR_FIELDS = ('background_color', 'line_color')


@dataclass
class PMSLConfig:
    """
    Configuration class for PMSL rendering parameters.

    Attributes:
        Data Parameters:
            input_file (str): netCDF file holding the pressure field
            variable (str): Pressure variable name
            lat_variable, lon_variable (str): Coordinate variable names

        Overlay Parameters:
            coastline_source (str): 'geojson', 'natural_earth' or 'none'
            coastline_file (str): GeoJSON path used by the 'geojson' source
            natural_earth_resolution (str): '10m', '50m' or '110m'
            line_color (Tuple[float, ...]): RGBA stroke colour
            line_width (float): Stroke width in screen pixels

        Raster Parameters:
            palette (str): Palette name
            floor_threshold (float): Floor of the minimum search in hPa

        Display Parameters:
            window_width, window_height (int): Window size in pixels
            background_color (Tuple[float, ...]): RGB clear colour
            dpi (int): Figure resolution
            output (Optional[str]): PNG output path
            interactive (bool): Open an interactive window

        Logging Parameters:
            verbose (bool): Enable console logging
            quiet (bool): Only log warnings and errors
            log_file (Optional[str]): Additional log file
    """
    input_file: str = DEFAULT_INPUT_FILE
    variable: str = PMSL_VARIABLE
    lat_variable: str = LATITUDE_VARIABLE
    lon_variable: str = LONGITUDE_VARIABLE

    coastline_source: str = "geojson"
    coastline_file: str = DEFAULT_COASTLINE_FILE
    natural_earth_resolution: str = "110m"
    line_color: Tuple[float, ...] = DEFAULT_LINE_COLOR
    line_width: float = DEFAULT_LINE_WIDTH

    palette: str = DEFAULT_PALETTE
    floor_threshold: float = FLOOR_THRESHOLD_HPA

    window_width: int = DEFAULT_WINDOW_SIZE[0]
    window_height: int = DEFAULT_WINDOW_SIZE[1]
    background_color: Tuple[float, ...] = DEFAULT_BACKGROUND_COLOR
    dpi: int = 100
    output: Optional[str] = None
    interactive: bool = False

    verbose: bool = True
    quiet: bool = False
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """
        Validate parameters after dataclass instantiation. Colours given as lists (as read from YAML) are normalized to tuples, the palette name is checked against the available palettes and the window, dpi and line width must be positive.

        Raises:
            ValueError: If any parameter is invalid.
        """
        for name in _COLOR_FIELDS:
            setattr(self, name, DataValidator.validate_color(getattr(self, name)))

        if str(self.palette).strip().lower() not in PALETTE_NAMES:
            raise ValueError(
                f"Unknown palette '{self.palette}'. Available palettes: {', '.join(PALETTE_NAMES)}"
            )

        if self.coastline_source not in COASTLINE_SOURCES:
            raise ValueError(
                f"Invalid coastline source '{self.coastline_source}'. "
                f"Choose from: {', '.join(COASTLINE_SOURCES)}"
            )

        if self.natural_earth_resolution not in NATURAL_EARTH_RESOLUTIONS:
            raise ValueError(
                f"Invalid Natural Earth resolution '{self.natural_earth_resolution}'. "
                f"Choose from: {', '.join(NATURAL_EARTH_RESOLUTIONS)}"
            )

        if not self._validate_window():
            raise ValueError(
                f"Invalid window parameters: {self.window_width} x {self.window_height} at {self.dpi} dpi"
            )

        if self.line_width <= 0:
            raise ValueError(f"Line width must be positive, got {self.line_width}")

    def _validate_window(self) -> bool:
        return self.window_width > 0 and self.window_height > 0 and self.dpi > 0

    @property
    def window_size(self) -> Tuple[int, int]:
        return self.window_width, self.window_height

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to a dictionary for serialization. Tuple values are converted to lists since YAML prefers list representations.

        Returns:
            Dict[str, Any]: All configuration parameters.
        """
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, tuple):
                config_dict[key] = list(value)
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PMSLConfig':
        """
        Construct a configuration from a dictionary of parameter values. Unknown keys are ignored with a warning so that configuration files written by newer versions still load.

        Parameters:
            config_dict (Dict[str, Any]): Parameters keyed by PMSLConfig attribute names.

        Returns:
            PMSLConfig: Validated configuration object.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)

        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        values = {key: value for key, value in config_dict.items() if key in known}

        for name in _COLOR_FIELDS:
            if isinstance(values.get(name), list):
                values[name] = tuple(values[name])

        return cls(**values)

    def save_to_file(self, filepath: str) -> None:
        """
        Persist the configuration to a YAML file.

        Parameters:
            filepath (str): Output YAML path.

        Returns:
            None
        """
        config_dict = self.to_dict()

        with open(filepath, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to: {filepath}")

    @classmethod
    def load_from_file(cls, filepath: str) -> 'PMSLConfig':
        """
        Load a configuration from a YAML file using safe loading and validate it through from_dict(). An empty file yields the default configuration.

        Parameters:
            filepath (str): YAML configuration path.

        Returns:
            PMSLConfig: Loaded and validated configuration.

        Raises:
            ValueError: If the file does not hold a mapping or a parameter is invalid.
        """
        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            config_dict = {}

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file {filepath} must contain a mapping")

        return cls.from_dict(config_dict)
