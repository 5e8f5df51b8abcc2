#!/usr/bin/env python3

"""
PMSL Performance Monitoring Utilities

This module provides lightweight timing of the stages of a rendering session (field load, range computation, image rendering, overlay load, frame drawing). It implements the PerformanceMonitor class whose timer() context manager measures a named operation, stores its duration and reports it through the package logger when the context exits, including when the timed operation raises. A summary of all stages can be retrieved as a dictionary or logged at the end of a run.

Classes:
    PerformanceMonitor: Timing utilities with context manager support.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Optional
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Performance monitoring utilities measuring elapsed time of named operations.
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        """
        Initialize an empty monitor.

        Parameters:
            log (Optional[logging.Logger]): Logger receiving timing reports (default: this module's logger).

        Returns:
            None
        """
        self.start_times: Dict[str, datetime] = {}
        self.durations: Dict[str, timedelta] = {}
        self.log = log if log is not None else logger

    @contextmanager
    def timer(self, operation_name: str):
        """
        Context manager measuring the elapsed time of a named operation. The duration is stored and logged at DEBUG level when the context exits, whether or not the operation raised.

        Parameters:
            operation_name (str): Name of the operation being timed.

        Yields:
            None
        """
        start_time = datetime.now()
        self.start_times[operation_name] = start_time

        try:
            yield
        finally:
            duration = datetime.now() - start_time
            self.durations[operation_name] = duration
            self.log.debug(f"{operation_name} completed in {duration.total_seconds():.2f} seconds")

    def get_summary(self) -> Dict[str, float]:
        """Return operation names mapped to their durations in seconds."""
        return {name: duration.total_seconds()
                for name, duration in self.durations.items()}

    def print_summary(self) -> None:
        """
        Log a timing summary of all measured operations followed by their total.
        """
        self.log.info("=== Performance Summary ===")
        for name, duration in self.durations.items():
            self.log.info(f"{name}: {duration.total_seconds():.2f} seconds")

        if self.durations:
            total_time = sum(d.total_seconds() for d in self.durations.values())
            self.log.info(f"Total time: {total_time:.2f} seconds")
