# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the schema compiler.
"""

from msi_schema.config.defaults import (
    CompilerDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "CompilerDefaults",
    "get_defaults",
    "reset_defaults",
]
