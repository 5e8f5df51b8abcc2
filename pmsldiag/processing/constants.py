#!/usr/bin/env python3

"""
Shared constants for the pmsldiag.processing package.

Place commonly reused literal messages, variable names and unit strings here
to avoid duplication across modules.
"""

LATITUDE_VARIABLE = "latitude"
LONGITUDE_VARIABLE = "longitude"
PMSL_VARIABLE = "msl"

PA = "Pa"
HPA = "hPa"
MB = "mb"
NOUNIT = ""

PA_TO_HPA = 0.01

# Cells below this value (hPa) are ignored when searching for the colour-scale minimum.
FLOOR_THRESHOLD_HPA = 100.0

DEFAULT_INPUT_FILE = "pmsl.nc"
DEFAULT_COASTLINE_FILE = "example/geojson/countries.geojson"
DEFAULT_PALETTE = "turbo"
DEFAULT_WINDOW_SIZE = (600, 600)
DEFAULT_BACKGROUND_COLOR = (0.2, 0.3, 0.4)
DEFAULT_LINE_COLOR = (0.1, 0.1, 0.1, 0.85)
DEFAULT_LINE_WIDTH = 1.0

COASTLINE_SOURCES = ("geojson", "natural_earth", "none")
NATURAL_EARTH_RESOLUTIONS = ("10m", "50m", "110m")

PERFORMANCE_MONITOR_MSG = "Performance monitor must be initialized"

# Names of the palettes offered by visualization.styling.PaletteId.
PALETTE_NAMES = ("turbo", "viridis", "plasma", "inferno", "magma",
                 "cividis", "jet", "hot", "gray", "twilight")
