#!/usr/bin/env python3

"""
PMSL Load Error Taxonomy

This module defines the exceptions raised while loading the inputs of a rendering session. All three failure kinds are unrecoverable at the point of load: the loaders raise them immediately and the session aborts before any rendering takes place. Each exception also derives from the closest built-in exception type so callers that only know about KeyError, OSError or ValueError keep working.

Classes:
    PMSLError: Base class for all pmsldiag load failures.
    MissingVariableError: A required named variable is absent from the source file.
    ReadError: I/O failure or shape mismatch while reading a variable or vector file.
    EmptyAxisError: A coordinate axis has zero length.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

from typing import Iterable, Tuple


class PMSLError(Exception):
    """Base class for errors raised by pmsldiag loaders."""


class MissingVariableError(PMSLError, KeyError):
    """
    Raised when one or more required variables (latitude axis, longitude axis or the scalar field) cannot be found in the source dataset. The names of every missing variable are kept on the ``variables`` attribute so the message lists all of them at once instead of failing on the first.
    """

    def __init__(self, variables: Iterable[str], source: str = "") -> None:
        self.variables: Tuple[str, ...] = tuple(variables)
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Required variable(s) not found{where}: {', '.join(self.variables)}")

    def __str__(self) -> str:
        return str(self.args[0])


class ReadError(PMSLError, OSError):
    """Raised on I/O failure or shape mismatch while reading a source."""


class EmptyAxisError(PMSLError, ValueError):
    """Raised when a latitude or longitude axis has no values."""

    def __init__(self, axis: str) -> None:
        self.axis = axis
        super().__init__(f"Coordinate axis '{axis}' is empty")
