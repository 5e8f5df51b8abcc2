#!/usr/bin/env python3
"""
PMSLdiag Test Suite Runner

This module provides the test runner for the PMSLdiag test collection. Run directly it
checks that the core dependencies import, loads every test module into one suite,
executes it with unittest's TextTestRunner and prints a summary of passed, failed,
errored and skipped tests. The same modules are collected by pytest.

Tests Performed:
    Test Module Discovery and Execution:
        - test_unit_conversion: Pascal to hectopascal conversion
        - test_data_processing: ScalarField, PMSLFieldLoader and DataValidator
        - test_coordinates: Rect, GeoExtent, ViewportTransform and destination fitting
        - test_diagnostics: Floor-rule normalization range
        - test_visualization: Palettes, ColorMapper, styling and PMSLVisualizer
        - test_overlay: Vector readers and CoastlineOverlay culling and drawing
        - test_session: RenderSession load sequence and frame drawing
        - test_utils: Configuration, logging, monitoring and exceptions
        - test_cli: Command-line parsing and end-to-end rendering

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import unittest
import sys
from pathlib import Path

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

TEST_MODULES = [
    'tests.test_unit_conversion',
    'tests.test_data_processing',
    'tests.test_coordinates',
    'tests.test_diagnostics',
    'tests.test_visualization',
    'tests.test_overlay',
    'tests.test_session',
    'tests.test_utils',
    'tests.test_cli',
]


def run_all_tests() -> unittest.TestResult:
    """
    Load every test module into one suite and run it. Modules that fail to import are reported and skipped so the remaining modules still run.

    Parameters:
        None

    Returns:
        unittest.TestResult: Results of the run.
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_name in TEST_MODULES:
        try:
            module = __import__(module_name, fromlist=[''])
            suite.addTests(loader.loadTestsFromModule(module))
        except ImportError as e:
            print(f"Warning: Could not import {module_name}: {e}")

    runner = unittest.TextTestRunner(verbosity=2, buffer=True)
    return runner.run(suite)


def print_test_summary(result: unittest.TestResult) -> None:
    """
    Print test counts, the names of failed, errored and skipped tests, and the success rate.

    Parameters:
        result (unittest.TestResult): Results of the run.

    Returns:
        None
    """
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)

    total_tests = result.testsRun
    failures = len(result.failures)
    errors = len(result.errors)
    skipped = len(result.skipped)
    passed = total_tests - failures - errors - skipped

    print(f"Total tests run: {total_tests}")
    print(f"Passed: {passed}")
    print(f"Failed: {failures}")
    print(f"Errors: {errors}")
    print(f"Skipped: {skipped}")

    if failures > 0:
        print("\nFAILURES:")
        for test, _ in result.failures:
            print(f"  - {test}")

    if errors > 0:
        print("\nERRORS:")
        for test, _ in result.errors:
            print(f"  - {test}")

    if skipped > 0:
        print("\nSKIPPED:")
        for test, reason in result.skipped:
            print(f"  - {test}: {reason}")

    success_rate = (passed / total_tests) * 100 if total_tests > 0 else 0
    print(f"\nSuccess rate: {success_rate:.1f}%")

    if failures == 0 and errors == 0:
        print("All tests passed!")
    else:
        print("Some tests failed or had errors")


if __name__ == '__main__':
    print("Running PMSLdiag Tests")
    print("=" * 50)

    try:
        import numpy
        import xarray
        import matplotlib
        import shapely
        print("Core dependencies available")
    except ImportError as e:
        print(f"Missing core dependency: {e}")
        sys.exit(1)

    print("\nStarting test execution...\n")

    result = run_all_tests()
    print_test_summary(result)

    sys.exit(1 if result.failures or result.errors else 0)
