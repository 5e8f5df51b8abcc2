#!/usr/bin/env python3
"""
PMSL Pressure Range Diagnostics Unit Tests

This module tests the floor rule that chooses the colour-scale range of a sea-level
pressure field.

Tests Performed:
    TestPressureRangeDiagnostics:
        - test_floor_excludes_low_cells: {50, 120, 300, 80} gives (120, 300)
        - test_no_cell_reaches_floor: {10, 20, 30} gives the inverted range (100, 30)
        - test_cell_equal_to_floor_qualifies: A cell at exactly 100 is eligible
        - test_non_finite_cells_ignored: NaN/Inf cells count toward neither bound
        - test_all_nan_field: All-NaN grid gives max -inf and min 100
        - test_compute_range_on_field: Range of a loaded ScalarField
        - test_inverted_range_logs_warning: Inverted ranges are returned and logged
        - test_custom_floor: Non-default floor threshold

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import sys
import math
import unittest
import numpy as np
from pathlib import Path

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from pmsldiag.diagnostics.pressure import NormalizationRange, PressureRangeDiagnostics
from pmsldiag.processing.base import ScalarField


def _field(values) -> ScalarField:
    values = np.atleast_2d(np.asarray(values, dtype=np.float64))
    return ScalarField(values=values,
                       lats=np.arange(values.shape[0], dtype=np.float64),
                       lons=np.arange(values.shape[1], dtype=np.float64))


class TestPressureRangeDiagnostics(unittest.TestCase):
    """
    Tests for the floor-rule normalization range.
    """

    def test_floor_excludes_low_cells(self) -> None:
        """
        Verify that cells below the 100 hPa floor are ignored for the minimum but the maximum is the true maximum: {50, 120, 300, 80} gives min 120 and max 300.

        Parameters:
            None

        Returns:
            None
        """
        value_range = PressureRangeDiagnostics.compute_range_from_values([50.0, 120.0, 300.0, 80.0])

        self.assertEqual(value_range, NormalizationRange(120.0, 300.0))
        self.assertFalse(value_range.is_inverted)
        self.assertEqual(value_range.span, 180.0)

    def test_no_cell_reaches_floor(self) -> None:
        """
        Verify that when no cell reaches the floor the minimum is exactly the floor and the resulting inverted range (100, 30) is returned unchanged.
        """
        value_range = PressureRangeDiagnostics.compute_range_from_values([10.0, 20.0, 30.0])

        self.assertEqual(value_range.min, 100.0)
        self.assertEqual(value_range.max, 30.0)
        self.assertTrue(value_range.is_inverted)

    def test_cell_equal_to_floor_qualifies(self) -> None:
        value_range = PressureRangeDiagnostics.compute_range_from_values([100.0, 99.99, 1013.0])
        self.assertEqual(value_range, NormalizationRange(100.0, 1013.0))

    def test_degenerate_range(self) -> None:
        value_range = PressureRangeDiagnostics.compute_range_from_values(np.full((3, 3), 1013.0))

        self.assertTrue(value_range.is_degenerate)
        self.assertEqual(value_range.span, 0.0)

    def test_non_finite_cells_ignored(self) -> None:
        values = [np.nan, 990.0, np.inf, 1030.0, -np.inf]
        value_range = PressureRangeDiagnostics.compute_range_from_values(values)

        self.assertEqual(value_range, NormalizationRange(990.0, 1030.0))

    def test_all_nan_field(self) -> None:
        value_range = PressureRangeDiagnostics.compute_range_from_values(np.full((2, 2), np.nan))

        self.assertEqual(value_range.min, 100.0)
        self.assertTrue(math.isinf(value_range.max) and value_range.max < 0)

    def test_compute_range_on_field(self) -> None:
        diagnostics = PressureRangeDiagnostics(verbose=False)
        value_range = diagnostics.compute_range(_field([[1000.0, 0.0], [1020.0, 1012.5]]))

        self.assertEqual(value_range, NormalizationRange(1000.0, 1020.0))

    def test_inverted_range_logs_warning(self) -> None:
        diagnostics = PressureRangeDiagnostics(verbose=False)

        with self.assertLogs('pmsldiag.diagnostics.pressure', level='WARNING') as logs:
            value_range = diagnostics.compute_range(_field([[10.0, 20.0, 30.0]]))

        self.assertEqual(value_range, NormalizationRange(100.0, 30.0))
        self.assertTrue(any('inverted' in message for message in logs.output))

    def test_min_max_logged(self) -> None:
        diagnostics = PressureRangeDiagnostics(verbose=True)

        with self.assertLogs('pmsldiag.diagnostics.pressure', level='INFO') as logs:
            diagnostics.compute_range(_field([[1000.0, 1020.0]]))

        self.assertTrue(any('msl min: 1000.0' in message and 'max: 1020.0' in message
                            for message in logs.output))

    def test_custom_floor(self) -> None:
        diagnostics = PressureRangeDiagnostics(floor=900.0, verbose=False)
        value_range = diagnostics.compute_range(_field([[850.0, 950.0, 1010.0]]))

        self.assertEqual(value_range, NormalizationRange(950.0, 1010.0))


if __name__ == '__main__':
    unittest.main()
