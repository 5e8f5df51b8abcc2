#!/usr/bin/env python3
"""
PMSLdiag Example: Sea-Level Pressure Maps with Country Boundaries

This script renders an ERA5 mean sea-level pressure file at several window sizes and
with different palettes, showing that the country outlines stay on the same cells of
the raster whatever the destination rectangle.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import sys
import matplotlib
matplotlib.use('Agg')
from pathlib import Path
from typing import Optional

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from pmsldiag.processing import PMSLConfig, PMSLError, PMSLLogger
from pmsldiag.visualization import PMSLVisualizer, RenderSession


def generate_pmsl_maps() -> Optional[Path]:
    """
    Load one session per palette and save it at a square, a wide and a tall window size. The field, range, image and overlay are loaded once per palette; only the frame layout changes between the saved files.

    Parameters:
        None

    Returns:
        Optional[Path]: Output directory, or None if the inputs could not be loaded.
    """
    print("=" * 80)
    print("PMSLdiag Example: Sea-Level Pressure Maps")
    print("=" * 80)

    PMSLLogger(verbose=True)

    input_file = "pmsl.nc"
    coastline_file = "example/geojson/countries.geojson"
    output_dir = Path("testPlot")
    output_dir.mkdir(parents=True, exist_ok=True)

    window_sizes = [(600, 600), (1200, 500), (400, 800)]

    for palette in ('turbo', 'viridis'):
        config = PMSLConfig(input_file=input_file, coastline_file=coastline_file, palette=palette)

        try:
            session = RenderSession.load(config)
        except PMSLError as e:
            print(f"Error loading data: {e}")
            return None

        for width, height in window_sizes:
            visualizer = PMSLVisualizer(window_size=(width, height), background_color=config.background_color)
            try:
                session.draw_frame(visualizer)
                written = visualizer.save(str(output_dir / f"pmsl_{palette}_{width}x{height}.png"))
                print(f"Saved: {written[0]}")
            finally:
                visualizer.close()

    print("=" * 80)
    return output_dir


if __name__ == "__main__":
    generate_pmsl_maps()
