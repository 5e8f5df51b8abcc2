#!/usr/bin/env python3

"""
Legacy setup.py for PMSLdiag

This setup.py file is kept for backward compatibility, but the package
is now configured using pyproject.toml. The main configuration is in
pyproject.toml which follows modern Python packaging standards.
"""

from setuptools import setup

# All configuration is now in pyproject.toml
# This setup.py is kept only for backward compatibility
setup()
