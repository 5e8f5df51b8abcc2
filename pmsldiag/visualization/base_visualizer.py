#!/usr/bin/env python3

"""
PMSL Base Visualization Framework

This module provides the drawing surface on which a sea-level pressure map is presented. The PMSLVisualizer class wraps a matplotlib Figure whose single Axes fills the whole figure and is set up in window pixel coordinates: x runs from 0 to the window width and y from 0 at the top to the window height at the bottom, so destination rectangles and transformed vertices can be handed to matplotlib unchanged. A frame is built in four steps. begin_frame() clears the axes to the background colour, blit_image() places the pre-rendered raster into a destination rectangle with nearest-neighbour sampling, stroke_polygon() queues a closed ring mapped through a ViewportTransform, and end_frame() flushes all queued rings as LineCollections grouped by colour and width. Stroke thickness is given in geographic units and converted to screen pixels by multiplying with the transform's magnification, so overlays keep a constant on-screen width at any zoom. Frames can be written to PNG at exactly the window's pixel size, or shown in an interactive window whose resize events redraw the frame for the new size.

Classes:
    PMSLVisualizer: matplotlib drawing surface in window pixel coordinates with frame, blit, stroke and save operations.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import logging
import numpy as np
import matplotlib.pyplot as plt
from collections import OrderedDict
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..processing.constants import DEFAULT_BACKGROUND_COLOR, DEFAULT_WINDOW_SIZE
from ..processing.utils_geog import Rect
from .styling import PMSLVisualizationStyle
from .transform import ViewportTransform

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0


class PMSLVisualizer:
    """
    Drawing surface for sea-level pressure maps backed by a matplotlib Figure in window pixel coordinates. The figure is created lazily on the first frame so that constructing a visualizer never opens a window.
    """

    def __init__(self, window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
                 dpi: int = 100,
                 background_color: Sequence[float] = DEFAULT_BACKGROUND_COLOR,
                 verbose: bool = True) -> None:
        """
        Initialize the visualizer with the window geometry and background colour. The figure size in inches is the window size divided by the dpi, so saved frames have exactly window_size pixels.

        Parameters:
            window_size (Tuple[int, int]): Window (width, height) in pixels (default: (600, 600)).
            dpi (int): Figure resolution (default: 100).
            background_color (Sequence[float]): RGB or RGBA clear colour (default: (0.2, 0.3, 0.4)).
            verbose (bool): Log frame statistics at DEBUG level (default: True).

        Returns:
            None
        """
        width, height = window_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Window size must be positive, got {width} x {height}")

        self._initial_size = (int(width), int(height))
        self.dpi = dpi
        self.background_color = PMSLVisualizationStyle.to_rgba(background_color)
        self.verbose = verbose

        self.fig: Optional[Figure] = None
        self.ax: Optional[Axes] = None

        self._strokes: Dict[Tuple[Tuple[float, ...], float], List[np.ndarray]] = OrderedDict()
        self._resize_cid: Optional[int] = None

    def _ensure_figure(self) -> None:
        if self.fig is not None:
            return

        width, height = self._initial_size
        self.fig = plt.figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        self.ax = self.fig.add_axes((0.0, 0.0, 1.0, 1.0))

    @property
    def window_size(self) -> Tuple[int, int]:
        """Current window (width, height) in pixels, following interactive resizes."""
        if self.fig is None:
            return self._initial_size
        width, height = self.fig.canvas.get_width_height()
        return int(width), int(height)

    def _apply_pixel_limits(self) -> None:
        width, height = self.window_size
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()

    def begin_frame(self) -> None:
        """
        Start a frame: clear the axes and any queued strokes and paint the background colour over the whole window.
        """
        self._ensure_figure()

        self.ax.clear()
        self.fig.set_facecolor(self.background_color)
        self.ax.set_facecolor(self.background_color)
        self._apply_pixel_limits()
        self._strokes = OrderedDict()

    def blit_image(self, image: np.ndarray, rect: Rect) -> None:
        """
        Draw an RGBA image scaled into a destination rectangle. Row 0 of the image is placed at the top of the rectangle and each image pixel becomes a solid block (nearest-neighbour sampling, no smoothing).

        Parameters:
            image (np.ndarray): uint8 array of shape (height, width, 4).
            rect (Rect): Destination rectangle in window pixels.

        Returns:
            None
        """
        self._ensure_figure()

        self.ax.imshow(image,
                       extent=(rect.x, rect.right, rect.bottom, rect.y),
                       origin='upper',
                       interpolation='nearest',
                       resample=False,
                       aspect='auto',
                       zorder=1)

    @staticmethod
    def _close_ring(points: np.ndarray) -> np.ndarray:
        if len(points) > 1 and not np.array_equal(points[0], points[-1]):
            return np.vstack([points, points[:1]])
        return points

    def stroke_polygon(self, vertices: np.ndarray,
                       transform: ViewportTransform,
                       color: Sequence[float],
                       thickness: float) -> None:
        """
        Queue a closed ring for stroking. Vertices are mapped to window pixels through the transform and the ring is closed if its last vertex differs from its first. The stroke width on screen is thickness * transform.max_scaling pixels; a collapsed transform (magnification 0) uses thickness directly.

        Parameters:
            vertices (np.ndarray): (N, 2) ring in (lon, -lat) coordinates.
            transform (ViewportTransform): Geographic to pixel mapping of this frame.
            color (Sequence[float]): RGBA stroke colour.
            thickness (float): Stroke thickness in geographic units.

        Returns:
            None
        """
        points = np.asarray(vertices, dtype=np.float64)
        if points.ndim != 2 or len(points) < 2:
            return

        magnification = transform.max_scaling
        width_px = thickness * magnification if magnification > 0.0 else thickness

        key = (tuple(float(c) for c in color), float(width_px))
        self._strokes.setdefault(key, []).append(self._close_ring(transform.apply(points)))

    def end_frame(self) -> int:
        """
        Finish a frame: flush the queued rings as one LineCollection per (colour, width) pair and request a redraw of the canvas.

        Returns:
            int: Number of rings drawn in this frame.
        """
        self._ensure_figure()

        count = 0
        for (color, width_px), segments in self._strokes.items():
            collection = LineCollection(segments,
                                        colors=[color],
                                        linewidths=width_px * POINTS_PER_INCH / self.dpi,
                                        joinstyle='round',
                                        capstyle='round',
                                        zorder=2)
            self.ax.add_collection(collection, autolim=False)
            count += len(segments)

        self._strokes = OrderedDict()
        self._apply_pixel_limits()
        self.fig.canvas.draw_idle()

        if self.verbose:
            logger.debug(f"Frame drawn at {self.window_size[0]} x {self.window_size[1]} with {count} rings")

        return count

    def save(self, output_path: str) -> List[str]:
        """
        Write the current frame to a PNG file at the window's pixel size.

        Parameters:
            output_path (str): Output path with or without the .png extension.

        Returns:
            List[str]: Written file paths.
        """
        return PMSLVisualizationStyle.save_plot(self.fig, output_path, formats=['png'], dpi=self.dpi)

    def run(self, on_frame: Callable[['PMSLVisualizer'], object]) -> None:
        """
        Open an interactive window and draw frames until it is closed. on_frame is called with this visualizer once before the window is shown and again on every resize event, so each frame is laid out for the current window size.

        Parameters:
            on_frame (Callable[[PMSLVisualizer], object]): Frame callback, usually RenderSession.draw_frame.

        Returns:
            None
        """
        self._ensure_figure()

        def _on_resize(event):
            on_frame(self)

        self._resize_cid = self.fig.canvas.mpl_connect('resize_event', _on_resize)
        on_frame(self)

        logger.info("Opening interactive window; close it to exit")
        plt.show()

    def close(self) -> None:
        """Release the figure; safe to call when no figure exists."""
        if self.fig is not None:
            if self._resize_cid is not None:
                self.fig.canvas.mpl_disconnect(self._resize_cid)
                self._resize_cid = None
            plt.close(self.fig)
        self.fig = None
        self.ax = None
