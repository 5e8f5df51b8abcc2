#!/usr/bin/env python3

"""
PMSL Logging Utilities

This module provides logging configuration for sea-level pressure rendering runs. It implements the PMSLLogger class as a lightweight wrapper around Python's standard logging module that configures the package logger ("pmsldiag") with a console handler on stdout and an optional file handler, both using a timestamped formatter. Library modules never configure logging themselves; they log through logging.getLogger(__name__), which makes them children of the package logger, so a single PMSLLogger created by the command-line interface controls the output of the loader, the range diagnostics, the overlay and the visualizer alike. Existing handlers are cleared on construction so that repeated setup (tests, interactive sessions) never duplicates messages.

Classes:
    PMSLLogger: Logging utility wrapper providing simplified configuration and message routing.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import sys
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class PMSLLogger:
    """
    Logging utility wrapper for PMSL rendering with configurable console and file output handlers.
    """

    def __init__(self, name: str = "pmsldiag", level: int = logging.INFO,
                 log_file: Optional[str] = None, verbose: bool = True) -> None:
        """
        Initialize and configure a named logger with console and optional file output. The logger's level is set, existing handlers are removed and a standardized timestamp formatter is attached to each new handler. With the default name the configuration applies to every module of the package.

        Parameters:
            name (str): Logger name (default: "pmsldiag").
            level (int): Minimum logging level (default: logging.INFO).
            log_file (Optional[str]): Path of an additional log file, None disables file logging (default: None).
            verbose (bool): Enable the stdout console handler (default: True).

        Returns:
            None
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        if verbose:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def info(self, message: str) -> None:
        """Log an informational message at INFO level."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message at WARNING level."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """
        Log an error message at ERROR level. Used by the command-line interface to report load failures before returning a non-zero exit code.

        Parameters:
            message (str): Error description.

        Returns:
            None
        """
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a diagnostic message at DEBUG level."""
        self.logger.debug(message)
