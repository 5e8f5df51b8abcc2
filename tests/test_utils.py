#!/usr/bin/env python3
"""
PMSL Utility Module Unit Tests

This module provides unit tests for the infrastructure shared by every rendering session:
configuration management (PMSLConfig), logging (PMSLLogger), performance monitoring
(PerformanceMonitor) and the load error taxonomy. These tests use temporary files for YAML
and log output and never read real pressure data.

Tests Performed:
    TestPMSLConfig:
        - test_default_initialization: Verifies defaults (variable, palette, window, colours)
        - test_custom_initialization: Tests custom parameters and colour normalization
        - test_invalid_parameters: Validates rejection of bad palette, source, window and colours
        - test_to_dict: Tests serialization with tuples converted to lists
        - test_from_dict: Validates deserialization and unknown-key warnings
        - test_save_and_load_file: Tests YAML persistence
        - test_load_empty_file: Empty YAML file gives the defaults
        - test_load_non_mapping_file: Validates ValueError for a YAML list

    TestPMSLLogger:
        - test_logger_initialization: Verifies handler attachment and name
        - test_logger_with_file: Tests file handler output
        - test_repeated_setup_does_not_duplicate: Handlers are replaced, not stacked
        - test_quiet_logger_has_null_handler: Non-verbose logger without a file stays silent
        - test_child_loggers_propagate: Module loggers reach the package handlers

    TestPerformanceMonitor:
        - test_timer_context_manager: Tests duration capture
        - test_multiple_operations: Validates separate entries per stage
        - test_timer_records_on_error: Durations are kept when the stage raises
        - test_print_summary: Tests the logged summary lines

    TestExceptions:
        - test_missing_variable_error: Lists every missing name and subclasses KeyError
        - test_read_error_is_os_error: ReadError can be caught as OSError
        - test_empty_axis_error: Keeps the axis name and subclasses ValueError

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import os
import sys
import time
import yaml
import shutil
import logging
import unittest
import tempfile
from pathlib import Path

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from pmsldiag.processing.exceptions import (
    EmptyAxisError, MissingVariableError, PMSLError, ReadError,
)
from pmsldiag.processing.utils_config import PMSLConfig
from pmsldiag.processing.utils_logger import PMSLLogger
from pmsldiag.processing.utils_monitor import PerformanceMonitor


class TestPMSLConfig(unittest.TestCase):
    """
    Tests for PMSLConfig dataclass behavior.

    Scope:
        Validates defaults, construction-time validation, dictionary conversion and
        YAML round trips using a temporary directory.
    """

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_initialization(self) -> None:
        """
        Verify the default configuration: the ERA5 'msl' variable on latitude/longitude axes, the turbo palette, the 100 hPa floor, a 600 x 600 window and the slate-blue background with near-black semi-transparent boundary lines.

        Parameters:
            None

        Returns:
            None
        """
        config = PMSLConfig()

        self.assertEqual(config.variable, 'msl')
        self.assertEqual(config.lat_variable, 'latitude')
        self.assertEqual(config.lon_variable, 'longitude')
        self.assertEqual(config.palette, 'turbo')
        self.assertEqual(config.floor_threshold, 100.0)
        self.assertEqual(config.window_size, (600, 600))
        self.assertEqual(config.background_color, (0.2, 0.3, 0.4))
        self.assertEqual(config.line_color, (0.1, 0.1, 0.1, 0.85))
        self.assertEqual(config.coastline_source, 'geojson')
        self.assertFalse(config.interactive)
        self.assertIsNone(config.output)

    def test_custom_initialization(self) -> None:
        config = PMSLConfig(input_file='era5.nc', palette='viridis',
                            window_width=800, window_height=400,
                            line_color=[1, 0, 0, 1], coastline_source='natural_earth',
                            natural_earth_resolution='50m')

        self.assertEqual(config.input_file, 'era5.nc')
        self.assertEqual(config.window_size, (800, 400))
        self.assertEqual(config.line_color, (1.0, 0.0, 0.0, 1.0))
        self.assertIsInstance(config.line_color, tuple)
        self.assertEqual(config.natural_earth_resolution, '50m')

    def test_invalid_parameters(self) -> None:
        """
        Validate that construction fails with ValueError for an unknown palette, an unknown coastline source or resolution, a non-positive window dimension or line width and an out-of-range colour channel.

        Parameters:
            None

        Returns:
            None
        """
        invalid = [
            {'palette': 'rainbow'},
            {'coastline_source': 'shapefile'},
            {'natural_earth_resolution': '25m'},
            {'window_width': 0},
            {'window_height': -10},
            {'dpi': 0},
            {'line_width': 0.0},
            {'background_color': (1.5, 0.0, 0.0)},
            {'line_color': (0.1, 0.1)},
        ]

        for kwargs in invalid:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    PMSLConfig(**kwargs)

    def test_to_dict(self) -> None:
        config_dict = PMSLConfig(variable='sp').to_dict()

        self.assertEqual(config_dict['variable'], 'sp')
        self.assertEqual(config_dict['background_color'], [0.2, 0.3, 0.4])
        self.assertIsInstance(config_dict['line_color'], list)
        self.assertIn('floor_threshold', config_dict)

    def test_from_dict(self) -> None:
        with self.assertLogs('pmsldiag.processing.utils_config', level='WARNING') as logs:
            config = PMSLConfig.from_dict({'variable': 'sp', 'colormap': 'jet',
                                           'background_color': [0.0, 0.0, 0.0]})

        self.assertEqual(config.variable, 'sp')
        self.assertEqual(config.background_color, (0.0, 0.0, 0.0))
        self.assertFalse(hasattr(config, 'colormap'))
        self.assertTrue(any('colormap' in message for message in logs.output))

    def test_save_and_load_file(self) -> None:
        """
        Verify that a configuration written with save_to_file() is plain YAML and loads back into an equal configuration.

        Parameters:
            None

        Returns:
            None
        """
        path = os.path.join(self.temp_dir, 'config.yaml')
        original = PMSLConfig(input_file='era5.nc', palette='magma', line_width=2.5,
                              output='map.png', log_file='run.log')

        original.save_to_file(path)

        with open(path, 'r') as f:
            raw = yaml.safe_load(f)
        self.assertEqual(raw['palette'], 'magma')

        self.assertEqual(PMSLConfig.load_from_file(path), original)

    def test_load_empty_file(self) -> None:
        path = os.path.join(self.temp_dir, 'empty.yaml')
        Path(path).write_text('')

        self.assertEqual(PMSLConfig.load_from_file(path), PMSLConfig())

    def test_load_non_mapping_file(self) -> None:
        path = os.path.join(self.temp_dir, 'list.yaml')
        Path(path).write_text('- msl\n- sp\n')

        with self.assertRaises(ValueError):
            PMSLConfig.load_from_file(path)


class TestPMSLLogger(unittest.TestCase):
    """
    Tests for PMSLLogger behavior.

    Scope:
        Uses uniquely named loggers so handler state does not leak between tests.
    """

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self) -> None:
        for name in ('test_pmsl_logger', 'test_pmsl_parent'):
            target = logging.getLogger(name)
            for handler in list(target.handlers):
                target.removeHandler(handler)
                handler.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_logger_initialization(self) -> None:
        logger = PMSLLogger('test_pmsl_logger', verbose=True)

        self.assertEqual(logger.logger.name, 'test_pmsl_logger')
        self.assertEqual(len(logger.logger.handlers), 1)
        self.assertIsInstance(logger.logger.handlers[0], logging.StreamHandler)

    def test_logger_with_file(self) -> None:
        """
        Validate that messages reach the log file with the timestamped format and that DEBUG messages are filtered out at INFO level.

        Parameters:
            None

        Returns:
            None
        """
        log_file = os.path.join(self.temp_dir, 'run.log')
        logger = PMSLLogger('test_pmsl_logger', log_file=log_file, verbose=False)

        logger.info('Test message')
        logger.debug('Hidden message')
        for handler in logger.logger.handlers:
            handler.flush()

        with open(log_file, 'r') as f:
            content = f.read()

        self.assertIn('test_pmsl_logger - INFO - Test message', content)
        self.assertNotIn('Hidden message', content)

    def test_repeated_setup_does_not_duplicate(self) -> None:
        PMSLLogger('test_pmsl_logger', verbose=True)
        logger = PMSLLogger('test_pmsl_logger', verbose=True)

        self.assertEqual(len(logger.logger.handlers), 1)

    def test_quiet_logger_has_null_handler(self) -> None:
        logger = PMSLLogger('test_pmsl_logger', verbose=False)

        self.assertEqual(len(logger.logger.handlers), 1)
        self.assertIsInstance(logger.logger.handlers[0], logging.NullHandler)

        logger.info('Info message')
        logger.warning('Warning message')
        logger.error('Error message')
        logger.debug('Debug message')

    def test_child_loggers_propagate(self) -> None:
        log_file = os.path.join(self.temp_dir, 'child.log')
        PMSLLogger('test_pmsl_parent', level=logging.DEBUG, log_file=log_file, verbose=False)

        logging.getLogger('test_pmsl_parent.visualization.overlay').debug('From a module')
        for handler in logging.getLogger('test_pmsl_parent').handlers:
            handler.flush()

        self.assertIn('From a module', Path(log_file).read_text())


class TestPerformanceMonitor(unittest.TestCase):
    """
    Tests for PerformanceMonitor timing utilities.
    """

    def test_timer_context_manager(self) -> None:
        monitor = PerformanceMonitor()

        with monitor.timer('Field load'):
            time.sleep(0.01)

        summary = monitor.get_summary()

        self.assertIn('Field load', summary)
        self.assertGreater(summary['Field load'], 0.0)
        self.assertLess(summary['Field load'], 1.0)

    def test_multiple_operations(self) -> None:
        monitor = PerformanceMonitor()

        with monitor.timer('Range computation'):
            pass
        with monitor.timer('Raster rendering'):
            pass

        self.assertEqual(list(monitor.get_summary()), ['Range computation', 'Raster rendering'])

    def test_timer_records_on_error(self) -> None:
        monitor = PerformanceMonitor()

        with self.assertRaises(RuntimeError):
            with monitor.timer('Overlay load'):
                raise RuntimeError('boom')

        self.assertIn('Overlay load', monitor.get_summary())

    def test_print_summary(self) -> None:
        """
        Verify that print_summary() logs a header, one line per stage and the total.

        Parameters:
            None

        Returns:
            None
        """
        log = logging.getLogger('test_pmsl_monitor')
        monitor = PerformanceMonitor(log=log)

        with monitor.timer('Frame draw'):
            pass

        with self.assertLogs('test_pmsl_monitor', level='INFO') as logs:
            monitor.print_summary()

        self.assertEqual(len(logs.output), 3)
        self.assertIn('=== Performance Summary ===', logs.output[0])
        self.assertIn('Frame draw:', logs.output[1])
        self.assertIn('Total time:', logs.output[2])


class TestExceptions(unittest.TestCase):
    """
    Tests for the load error taxonomy.
    """

    def test_missing_variable_error(self) -> None:
        error = MissingVariableError(['latitude', 'msl'], source='pmsl.nc')

        self.assertEqual(error.variables, ('latitude', 'msl'))
        self.assertIn('latitude, msl', str(error))
        self.assertIn('pmsl.nc', str(error))
        self.assertIsInstance(error, KeyError)
        self.assertIsInstance(error, PMSLError)

    def test_read_error_is_os_error(self) -> None:
        with self.assertRaises(OSError):
            raise ReadError('cannot read countries.geojson')

    def test_empty_axis_error(self) -> None:
        error = EmptyAxisError('longitude')

        self.assertEqual(error.axis, 'longitude')
        self.assertIn("'longitude'", str(error))
        self.assertIsInstance(error, ValueError)


if __name__ == '__main__':
    unittest.main()
