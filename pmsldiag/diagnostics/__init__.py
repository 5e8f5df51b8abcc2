#!/usr/bin/env python3

"""
PMSL Diagnostics Package

This package provides diagnostic calculations on loaded sea-level pressure fields,
currently the floor-rule normalization range used for colour mapping.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: November 2025
Version: 1.0.0
"""

from pmsldiag.diagnostics.pressure import NormalizationRange, PressureRangeDiagnostics

__all__ = ['NormalizationRange', 'PressureRangeDiagnostics']
