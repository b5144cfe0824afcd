# ============================================================================
# VERSION - MSI SCHEMA COMPILER
# ============================================================================
"""
Version information for the MSI schema compiler.

This is the single source of truth for the package version.
Updated manually for each release.
"""
# Version format: major.minor.patch
# Criteria for 0.2 - standard tables compile and round-trip
__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"
