#!/usr/bin/env python3

"""
Unified Command Line Interface for PMSL Rendering

This module provides the command-line interface for rendering sea-level pressure maps with a coastline overlay. It implements an argparse-based CLI with two subcommands sharing one set of options: render draws a single frame off-screen and writes it to a PNG file, show opens an interactive window that redraws the map whenever it is resized. Options can also come from a YAML configuration file; options given explicitly on the command line override the file. The CLI configures the package logger, runs the load sequence through RenderSession with stage timing from PerformanceMonitor, and converts failures into exit codes: load errors (missing file, missing variable, empty axis, unreadable coastline file) and invalid options are logged and return 1, a keyboard interrupt returns 130.

Classes:
    PMSLUnifiedCLI: Main class implementing the unified command-line interface

Commands:
    render: Render one frame to a PNG file
    show: Open an interactive window

Functions:
    main: Entry point function orchestrating CLI parsing, configuration and rendering

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import sys
import os
import argparse
import textwrap
import logging
import traceback
import matplotlib
from typing import Any, Dict, List, Optional

from .constants import (
    DEFAULT_INPUT_FILE, NATURAL_EARTH_RESOLUTIONS, PALETTE_NAMES,
    PERFORMANCE_MONITOR_MSG,
)
from .exceptions import PMSLError
from .utils_config import PMSLConfig
from .utils_logger import PMSLLogger
from .utils_monitor import PerformanceMonitor
from ..visualization.base_visualizer import PMSLVisualizer
from ..visualization.session import RenderSession

DEFAULT_OUTPUT = "pmsl_map.png"


class PMSLUnifiedCLI:
    """
    Unified command-line interface for PMSL map rendering.
    """

    COMMANDS = {
        'render': 'Render the map to a PNG file',
        'show': 'Open the map in an interactive window'
    }

    def __init__(self) -> None:
        self.logger: Optional[PMSLLogger] = None
        self.perf_monitor: Optional[PerformanceMonitor] = None
        self.config: Optional[PMSLConfig] = None

    def create_main_parser(self) -> argparse.ArgumentParser:
        """
        Construct the main argument parser with the render and show subcommands. Both subcommands accept the same options, whose defaults are left unset so that only explicitly given options override a configuration file.

        Returns:
            argparse.ArgumentParser: Configured parser.
        """
        parser = argparse.ArgumentParser(
            prog='pmsldiag',
            description='Sea-level pressure map renderer with coastline overlay',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=textwrap.dedent("""
            Examples:
              # Render ERA5 mean sea-level pressure to a PNG
              pmsldiag render --input pmsl.nc --output map.png

              # Use Natural Earth boundaries and a different palette
              pmsldiag render --input pmsl.nc --natural-earth 50m --palette viridis

              # Interactive window
              pmsldiag show --input pmsl.nc --coastlines countries.geojson

              # Use configuration file
              pmsldiag render --config pmsl_config.yaml
            """)
        )

        parser.add_argument('--version', action='version', version='pmsldiag 1.0.0')

        subparsers = parser.add_subparsers(
            dest='command',
            title='Commands',
            description='Choose how the map is presented',
            help='Available commands'
        )

        for name, help_text in self.COMMANDS.items():
            subparser = subparsers.add_parser(
                name,
                help=help_text,
                description=help_text,
                formatter_class=argparse.RawDescriptionHelpFormatter
            )
            self._add_common_arguments(subparser)

        return parser

    def _add_common_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Add the options shared by all subcommands, grouped by concern.

        Parameters:
            parser (argparse.ArgumentParser): Subcommand parser.

        Returns:
            None
        """
        io_group = parser.add_argument_group('Input/Output')
        io_group.add_argument('--input', '-i', type=str, dest='input_file',
                              help=f'netCDF file with the pressure field (default: {DEFAULT_INPUT_FILE})')
        io_group.add_argument('--variable', type=str,
                              help='Pressure variable name (default: msl)')
        io_group.add_argument('--output', '-o', type=str,
                              help=f'Output PNG path (render default: {DEFAULT_OUTPUT})')
        io_group.add_argument('--config', type=str,
                              help='Configuration file path (YAML format)')

        overlay_group = parser.add_argument_group('Coastline Overlay')
        source = overlay_group.add_mutually_exclusive_group()
        source.add_argument('--coastlines', type=str, metavar='FILE',
                            help='GeoJSON FeatureCollection with country polygons')
        source.add_argument('--natural-earth', type=str, metavar='RES',
                            choices=NATURAL_EARTH_RESOLUTIONS,
                            help='Use Natural Earth admin-0 countries at this scale')
        source.add_argument('--no-coastlines', action='store_true',
                            help='Draw the raster only')
        overlay_group.add_argument('--line-width', type=float,
                                   help='Boundary line width in pixels (default: 1.0)')

        display_group = parser.add_argument_group('Display Options')
        display_group.add_argument('--palette', type=str, choices=PALETTE_NAMES,
                                   help='Colour palette (default: turbo)')
        display_group.add_argument('--width', type=int, dest='window_width',
                                   help='Window width in pixels (default: 600)')
        display_group.add_argument('--height', type=int, dest='window_height',
                                   help='Window height in pixels (default: 600)')
        display_group.add_argument('--dpi', type=int,
                                   help='Figure resolution (default: 100)')

        log_group = parser.add_argument_group('Logging')
        log_group.add_argument('--verbose', '-v', action='store_true',
                               help='Enable debug output')
        log_group.add_argument('--quiet', '-q', action='store_true',
                               help='Only report warnings and errors')
        log_group.add_argument('--log-file', type=str,
                               help='Log file path')

    def parse_args_to_overrides(self, args: argparse.Namespace) -> Dict[str, Any]:
        """
        Map parsed arguments to configuration attributes. Options that were not given are left out so that they do not override values from a configuration file.

        Parameters:
            args (argparse.Namespace): Parsed arguments.

        Returns:
            Dict[str, Any]: Configuration overrides keyed by PMSLConfig attribute names.
        """
        overrides: Dict[str, Any] = {}

        for attr in ('input_file', 'variable', 'output', 'line_width', 'palette',
                     'window_width', 'window_height', 'dpi', 'log_file'):
            value = getattr(args, attr, None)
            if value is not None:
                overrides[attr] = value

        if getattr(args, 'coastlines', None):
            overrides['coastline_source'] = 'geojson'
            overrides['coastline_file'] = args.coastlines
        elif getattr(args, 'natural_earth', None):
            overrides['coastline_source'] = 'natural_earth'
            overrides['natural_earth_resolution'] = args.natural_earth
        elif getattr(args, 'no_coastlines', False):
            overrides['coastline_source'] = 'none'

        if getattr(args, 'quiet', False):
            overrides['quiet'] = True
            overrides['verbose'] = False

        if getattr(args, 'command', None) == 'show':
            overrides['interactive'] = True

        return overrides

    def build_config(self, args: argparse.Namespace) -> PMSLConfig:
        """
        Build the session configuration from an optional YAML file and the explicit command-line options, the latter taking precedence.

        Parameters:
            args (argparse.Namespace): Parsed arguments.

        Returns:
            PMSLConfig: Validated configuration.
        """
        config_dict: Dict[str, Any] = {}

        if getattr(args, 'config', None):
            config_dict = PMSLConfig.load_from_file(args.config).to_dict()

        config_dict.update(self.parse_args_to_overrides(args))
        return PMSLConfig.from_dict(config_dict)

    def setup_logging(self, config: PMSLConfig, debug: bool = False) -> PMSLLogger:
        """
        Configure the package logger from the verbosity settings: WARNING when quiet, DEBUG when requested, INFO otherwise.

        Parameters:
            config (PMSLConfig): Configuration with quiet, verbose and log_file settings.
            debug (bool): Enable DEBUG level (default: False).

        Returns:
            PMSLLogger: Configured logger.
        """
        log_level = logging.INFO
        if config.quiet:
            log_level = logging.WARNING
        elif debug:
            log_level = logging.DEBUG

        self.logger = PMSLLogger(
            name="pmsldiag",
            level=log_level,
            log_file=config.log_file,
            verbose=config.verbose or config.quiet
        )

        return self.logger

    def validate_config(self, config: PMSLConfig) -> bool:
        """
        Check that the files named by the configuration exist before any loading starts.

        Parameters:
            config (PMSLConfig): Configuration to check.

        Returns:
            bool: True if rendering can proceed.
        """
        errors: List[str] = []

        if not os.path.isfile(config.input_file):
            errors.append(f"Input file not found: {config.input_file}")

        if config.coastline_source == 'geojson' and not os.path.isfile(config.coastline_file):
            errors.append(f"Coastline file not found: {config.coastline_file} "
                          f"(use --natural-earth or --no-coastlines)")

        if errors:
            self.logger.error("Configuration validation failed:")
            for error in errors:
                self.logger.error(f"  - {error}")
            return False

        return True

    def run(self, config: PMSLConfig) -> bool:
        """
        Load the session and present it: one frame to PNG for render, an interactive window for show.

        Parameters:
            config (PMSLConfig): Validated configuration.

        Returns:
            bool: True on success.
        """
        assert self.perf_monitor is not None, PERFORMANCE_MONITOR_MSG

        session = RenderSession.load(config, monitor=self.perf_monitor)

        if not config.interactive:
            matplotlib.use('Agg')

        visualizer = PMSLVisualizer(window_size=config.window_size,
                                    dpi=config.dpi,
                                    background_color=config.background_color,
                                    verbose=config.verbose)

        try:
            if config.interactive:
                visualizer.run(session.draw_frame)
            else:
                with self.perf_monitor.timer("Frame drawing"):
                    session.draw_frame(visualizer)
                visualizer.save(config.output or DEFAULT_OUTPUT)
        finally:
            visualizer.close()

        return True

    def main(self, argv: Optional[List[str]] = None) -> int:
        """
        Entry point: parse arguments, build the configuration, configure logging and render.

        Parameters:
            argv (Optional[List[str]]): Arguments without the program name (default: sys.argv[1:]).

        Returns:
            int: 0 on success, 1 on errors, 130 when interrupted.
        """
        try:
            parser = self.create_main_parser()
            args = parser.parse_args(argv)

            if not args.command:
                parser.print_help()
                return 1

            try:
                self.config = self.build_config(args)
            except (ValueError, OSError) as e:
                self.setup_logging(PMSLConfig())
                self.logger.error(f"Invalid configuration: {e}")
                return 1

            self.setup_logging(self.config, debug=args.verbose)

            if not self.validate_config(self.config):
                return 1

            if args.verbose:
                self._print_config_summary()

            self.perf_monitor = PerformanceMonitor()
            success = self.run(self.config)

            if args.verbose:
                self.perf_monitor.print_summary()

            return 0 if success else 1

        except KeyboardInterrupt:
            print("\nRendering interrupted by user")
            return 130
        except PMSLError as e:
            self.logger.error(str(e))
            return 1
        except Exception as e:
            if self.logger:
                self.logger.error(f"Unexpected error: {e}")
                self.logger.error(traceback.format_exc())
            else:
                print(f"Error: {e}")
                traceback.print_exc()
            return 1

    def _print_config_summary(self) -> None:
        if self.logger and self.config:
            self.logger.info("=== Configuration Summary ===")
            for key, value in self.config.to_dict().items():
                if value is not None:
                    self.logger.info(f"  {key}: {value}")
            self.logger.info("=" * 30)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Module-level entry point for the pmsldiag console script.

    Parameters:
        argv (Optional[List[str]]): Arguments without the program name (default: sys.argv[1:]).

    Returns:
        int: Process exit code.
    """
    cli = PMSLUnifiedCLI()
    return cli.main(argv)


if __name__ == "__main__":
    sys.exit(main())
