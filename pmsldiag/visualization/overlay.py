#!/usr/bin/env python3

"""
PMSL Coastline Vector Overlay

This module provides the vector layer of a sea-level pressure map: national boundary polygons read from a geographic feature collection, culled once at load time to the extent of the loaded field, and stroked every frame through the same viewport transform that places the raster. Vertices are stored in the (longitude, -latitude) convention so that the y axis increases downwards like image rows, and the visible extent handed to the overlay must be expressed in the same convention (GeoExtent.to_rect()). Culling compares each feature's bounding rectangle, taken over all of its polygons, with that extent and counts touching edges as intersecting. The stroke width is divided by the current display magnification so that outlines keep a constant width in screen pixels however far the map is zoomed.

Geometry sources are GeoJSON FeatureCollection files (decomposed into simple polygons with shapely) and the Natural Earth admin-0 countries dataset distributed through cartopy.

Classes:
    PolygonFeature: One feature (country) with one or more polygons in (lon, -lat) coordinates.
    CoastlineOverlay: Culled polygon set with per-frame drawing.

Functions:
    read_geojson_features: Read polygon features from a GeoJSON file.
    read_natural_earth_features: Read the Natural Earth admin-0 countries through cartopy.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import os
import json
import logging
import numpy as np
import cartopy.io.shapereader as shpreader
from dataclasses import dataclass
from shapely.errors import GeometryTypeError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ..processing.constants import DEFAULT_LINE_COLOR, DEFAULT_LINE_WIDTH
from ..processing.exceptions import ReadError
from ..processing.utils_geog import Rect
from .styling import PMSLVisualizationStyle
from .transform import ViewportTransform

logger = logging.getLogger(__name__)

_NAME_PROPERTIES = ('name', 'NAME', 'ADMIN', 'admin', 'NAME_LONG')


def _ring_to_lon_y(coords: Sequence[Sequence[float]]) -> np.ndarray:
    ring = np.asarray(coords, dtype=np.float64)[:, :2].copy()
    ring[:, 1] = -ring[:, 1]
    ring.setflags(write=False)
    return ring


def _iter_polygons(geometry: BaseGeometry) -> Iterator[BaseGeometry]:
    geom_type = geometry.geom_type

    if geom_type == 'Polygon':
        if not geometry.is_empty:
            yield geometry
    elif geom_type in ('MultiPolygon', 'GeometryCollection'):
        for part in geometry.geoms:
            yield from _iter_polygons(part)


@dataclass(frozen=True, eq=False)
class PolygonFeature:
    """
    A feature made of one or more polygons.

    Attributes:
        polygons: One entry per polygon, each a tuple of rings (exterior first, then
            holes); every ring is an (N, 2) array of (lon, -lat) vertices.
        name (str): Feature name from its properties, empty if none.
    """
    polygons: Tuple[Tuple[np.ndarray, ...], ...]
    name: str = ""

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry, name: str = "") -> Optional['PolygonFeature']:
        """
        Decompose a shapely geometry into simple polygons and convert their rings to the (lon, -lat) convention. Polygon, MultiPolygon and GeometryCollection members are supported; anything else (points, lines) contributes nothing.

        Parameters:
            geometry (BaseGeometry): Geometry in (lon, lat) degrees.
            name (str): Feature name.

        Returns:
            Optional[PolygonFeature]: The feature, or None if it has no polygon.
        """
        polygons = []
        for polygon in _iter_polygons(geometry):
            rings = [_ring_to_lon_y(polygon.exterior.coords)]
            rings.extend(_ring_to_lon_y(interior.coords) for interior in polygon.interiors)
            polygons.append(tuple(rings))

        if not polygons:
            return None

        return cls(polygons=tuple(polygons), name=name)

    def rings(self) -> Iterator[np.ndarray]:
        for polygon in self.polygons:
            yield from polygon

    def bounding_rect(self) -> Rect:
        """Bounding rectangle of every polygon of the feature in (lon, -lat) space."""
        vertices = np.concatenate([polygon[0] for polygon in self.polygons])
        x_min, y_min = vertices.min(axis=0)
        x_max, y_max = vertices.max(axis=0)
        return Rect.from_bounds(x_min, y_min, x_max, y_max)


def _feature_name(properties: Optional[Dict[str, Any]]) -> str:
    if not isinstance(properties, dict):
        return ""
    for key in _NAME_PROPERTIES:
        if properties.get(key):
            return str(properties[key])
    return ""


def read_geojson_features(path: Union[str, os.PathLike]) -> List[PolygonFeature]:
    """
    Read the polygon features of a GeoJSON FeatureCollection. A bare Feature or geometry object is accepted as a one-feature collection. Features without a geometry, or whose geometry has no polygonal part, are skipped; entries that are not objects and geometries that shapely cannot parse are skipped with a warning.

    Parameters:
        path (Union[str, os.PathLike]): Path to the GeoJSON file.

    Returns:
        List[PolygonFeature]: Features in file order.

    Raises:
        ReadError: If the file is missing, is not valid JSON or its features member is not a list.
    """
    path = os.fspath(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ReadError(f"Could not read GeoJSON file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ReadError(f"GeoJSON file {path} does not contain an object")

    if data.get('type') == 'FeatureCollection' or 'features' in data:
        raw_features = data.get('features') or []
        if not isinstance(raw_features, list):
            raise ReadError(f"GeoJSON file {path} has a 'features' member that is not a list")
    elif data.get('type') == 'Feature':
        raw_features = [data]
    elif 'coordinates' in data or 'geometries' in data:
        raw_features = [{'type': 'Feature', 'geometry': data, 'properties': {}}]
    else:
        raise ReadError(f"GeoJSON file {path} has unsupported type '{data.get('type')}'")

    features: List[PolygonFeature] = []

    for i, raw in enumerate(raw_features):
        if raw is None:
            continue
        if not isinstance(raw, dict):
            logger.warning(f"Skipping feature {i} of {path}: not a GeoJSON object")
            continue

        geometry = raw.get('geometry')
        if not geometry:
            continue

        try:
            geom = shape(geometry)
        except (GeometryTypeError, AttributeError, ValueError, TypeError, KeyError, IndexError) as e:
            logger.warning(f"Skipping feature {i} of {path}: invalid geometry ({e})")
            continue

        feature = PolygonFeature.from_geometry(geom, _feature_name(raw.get('properties')))
        if feature is not None:
            features.append(feature)

    logger.debug(f"Read {len(features)} polygon features from {path}")
    return features


def read_natural_earth_features(resolution: str = "110m") -> List[PolygonFeature]:
    """
    Read the Natural Earth admin-0 countries dataset through cartopy's shape reader. Cartopy downloads the shapefile into its data directory on first use.

    Parameters:
        resolution (str): Natural Earth scale '10m', '50m' or '110m' (default: '110m').

    Returns:
        List[PolygonFeature]: One feature per country.

    Raises:
        ReadError: If the dataset cannot be downloaded or read.
    """
    try:
        shapefile = shpreader.natural_earth(resolution=resolution, category='cultural',
                                            name='admin_0_countries')
        reader = shpreader.Reader(shapefile)
        records = list(reader.records())
    except (OSError, ValueError) as e:
        raise ReadError(f"Could not read Natural Earth countries at {resolution}: {e}") from e

    features: List[PolygonFeature] = []

    for record in records:
        if record.geometry is None:
            continue
        feature = PolygonFeature.from_geometry(record.geometry, _feature_name(record.attributes))
        if feature is not None:
            features.append(feature)

    logger.debug(f"Read {len(features)} Natural Earth country features ({resolution})")
    return features


class CoastlineOverlay:
    """
    National boundary overlay aligned with the raster layer.

    The polygon set and the visible set are fixed at construction; only the grid
    size and the per-frame destination rectangle feed into drawing.
    """

    def __init__(self, features: Iterable[PolygonFeature],
                 visible_rect: Rect,
                 grid_size: Tuple[int, int] = (1, 1),
                 color: Sequence[float] = DEFAULT_LINE_COLOR,
                 line_width: float = DEFAULT_LINE_WIDTH) -> None:
        """
        Build the overlay and compute its visible set. Features whose bounding rectangle intersects the visible rectangle (inclusive of the boundary) are kept for drawing; the others stay in the polygon set but are never drawn. The visible set is computed exactly once here because the extent of a session never changes.

        Parameters:
            features (Iterable[PolygonFeature]): Features in (lon, -lat) coordinates.
            visible_rect (Rect): Visible extent in (lon, -lat) coordinates, usually GeoExtent.to_rect().
            grid_size (Tuple[int, int]): Raster size in cells (width, height) (default: (1, 1)).
            color (Sequence[float]): RGBA stroke colour (default: (0.1, 0.1, 0.1, 0.85)).
            line_width (float): Stroke width in screen pixels (default: 1.0).

        Returns:
            None
        """
        self._features: Tuple[PolygonFeature, ...] = tuple(features)
        self._visible_rect = visible_rect
        self._visible_indices: Tuple[int, ...] = tuple(
            i for i, feature in enumerate(self._features)
            if feature.bounding_rect().intersects(visible_rect)
        )
        self.color = PMSLVisualizationStyle.to_rgba(color)
        self.line_width = float(line_width)
        self._grid_w = 1
        self._grid_h = 1
        self.set_grid_size(*grid_size)

        logger.info(f"Coastline overlay: {len(self._visible_indices)} of {len(self._features)} features visible")

    @classmethod
    def load(cls, source: Union[str, os.PathLike, Iterable[PolygonFeature]],
             visible_rect: Rect, **kwargs: Any) -> 'CoastlineOverlay':
        """
        Load an overlay from a GeoJSON path or from features read elsewhere (for example read_natural_earth_features()).

        Parameters:
            source (Union[str, os.PathLike, Iterable[PolygonFeature]]): GeoJSON path or features.
            visible_rect (Rect): Visible extent in (lon, -lat) coordinates.
            **kwargs: Passed to the constructor (grid_size, color, line_width).

        Returns:
            CoastlineOverlay: Overlay with its visible set computed.
        """
        if isinstance(source, (str, os.PathLike)):
            features = read_geojson_features(source)
        else:
            features = list(source)
        return cls(features, visible_rect, **kwargs)

    @property
    def features(self) -> Tuple[PolygonFeature, ...]:
        return self._features

    @property
    def visible_indices(self) -> Tuple[int, ...]:
        return self._visible_indices

    @property
    def visible_rect(self) -> Rect:
        return self._visible_rect

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self._grid_w, self._grid_h

    def set_grid_size(self, width: int, height: int) -> None:
        """Set the raster size in cells used to derive the half-cell correction."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width} x {height}")
        self._grid_w = int(width)
        self._grid_h = int(height)

    def line_thickness(self, transform: ViewportTransform) -> float:
        """
        Stroke thickness in geographic units giving line_width screen pixels under the transform. A collapsed transform (magnification 0) keeps the screen width unchanged.
        """
        magnification = transform.max_scaling
        if magnification <= 0.0:
            return self.line_width
        return self.line_width / magnification

    def draw(self, surface: Any, dest_rect: Rect,
             lon_min: float, lon_max: float,
             y_min: float, y_max: float) -> ViewportTransform:
        """
        Stroke every visible feature onto a drawing surface aligned with the raster drawn into dest_rect. The transform is derived from the given bounds, the stored grid size and the destination rectangle on every call, so a resized window never sees a stale mapping. Every ring, exterior and holes, is stroked with the overlay colour and a thickness inversely proportional to the display magnification.

        Parameters:
            surface (Any): Drawing surface providing stroke_polygon(vertices, transform, color, thickness).
            dest_rect (Rect): Destination rectangle of the raster in screen pixels.
            lon_min, lon_max (float): Longitude bounds of the field.
            y_min, y_max (float): -latitude bounds of the field.

        Returns:
            ViewportTransform: The transform used for this frame.
        """
        transform = ViewportTransform.derive_from_bounds(lon_min, lon_max, y_min, y_max,
                                                         self._grid_w, self._grid_h, dest_rect)
        thickness = self.line_thickness(transform)

        for index in self._visible_indices:
            for ring in self._features[index].rings():
                surface.stroke_polygon(ring, transform, self.color, thickness)

        return transform
