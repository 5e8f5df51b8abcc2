#!/usr/bin/env python3

"""
PMSL Pressure Range Diagnostics

This module provides the colour-scale normalization range for sea-level pressure maps. The maximum of the range is the true maximum of the field, but the minimum only considers cells at or above a floor of 100 hPa: values below the floor are physically implausible for sea-level pressure (masked land points, fill values decoded as zero, unconverted fragments) and would otherwise stretch the colour scale until the real pressure pattern collapses into a single colour. When no cell reaches the floor the minimum falls back to the floor itself. A field whose maximum is below the floor therefore yields an inverted range (max < min); that range is returned unchanged and the colour mapper's clamping keeps it renderable.

Classes:
    NormalizationRange: Named (min, max) pair used to map values to [0, 1].
    PressureRangeDiagnostics: Computes the normalization range of a ScalarField under the floor rule.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import logging
import numpy as np
from typing import NamedTuple, Union

from ..processing.base import ScalarField
from ..processing.constants import FLOOR_THRESHOLD_HPA

logger = logging.getLogger(__name__)


class NormalizationRange(NamedTuple):
    """(min, max) bounds of the colour scale. ``max >= min`` is not guaranteed."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min

    @property
    def is_inverted(self) -> bool:
        return self.max < self.min


class PressureRangeDiagnostics:
    """
    Normalization range diagnostics for sea-level pressure fields.

    This class applies the floor rule to choose colour-scale bounds from a loaded
    field.
    """

    def __init__(self, floor: float = FLOOR_THRESHOLD_HPA, verbose: bool = True) -> None:
        """
        Initialize the range diagnostics with the floor below which cells are excluded from the minimum search.

        Parameters:
            floor (float): Minimum-eligibility threshold in the field's units (default: 100.0 hPa).
            verbose (bool): Log the computed range at INFO level (default: True).

        Returns:
            None
        """
        self.floor = float(floor)
        self.verbose = verbose

    @staticmethod
    def compute_range_from_values(values: Union[np.ndarray, list],
                                  floor: float = FLOOR_THRESHOLD_HPA) -> NormalizationRange:
        """
        Compute the normalization range of an array under the floor rule. The maximum is taken over every finite cell regardless of the floor. The minimum is taken over finite cells whose value is at least ``floor``; if there are none it is exactly ``floor``. Non-finite cells contribute to neither bound, and an array without finite cells yields a maximum of -inf, which is what a plain scan starting from -inf produces.

        Parameters:
            values (Union[np.ndarray, list]): Grid values in any shape.
            floor (float): Minimum-eligibility threshold (default: 100.0).

        Returns:
            NormalizationRange: The (min, max) pair, possibly inverted.
        """
        data = np.asarray(values, dtype=np.float64)
        finite = data[np.isfinite(data)]

        vmax = float(np.max(finite)) if finite.size else float('-inf')

        eligible = finite[finite >= floor]
        vmin = float(np.min(eligible)) if eligible.size else float(floor)

        return NormalizationRange(vmin, vmax)

    def compute_range(self, field: ScalarField) -> NormalizationRange:
        """
        Compute the colour-scale range of a loaded field under the floor rule. An inverted range is logged as a warning but returned as computed so the caller sees exactly what the rule produced.

        Parameters:
            field (ScalarField): Loaded field in hPa.

        Returns:
            NormalizationRange: The (min, max) pair used by the colour mapper.
        """
        value_range = self.compute_range_from_values(field.values, self.floor)

        log = logger.info if self.verbose else logger.debug
        log(f"{field.variable} min: {value_range.min} {field.units} max: {value_range.max} {field.units}")

        if value_range.is_inverted:
            logger.warning(
                f"Normalization range is inverted (max {value_range.max} < min {value_range.min}); "
                f"no cell of '{field.variable}' reaches the {self.floor} {field.units} floor"
            )

        return value_range
