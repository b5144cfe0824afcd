# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for the standard MSI table DAOs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic DAO models for the standard installer tables. Models define
table metadata via __msi_* ClassVar attributes for schema compilation.
"""

from msi_schema.models.tables import (
    Directory,
    Component,
    FeatureComponents,
    File,
    Property,
    STANDARD_TABLES,
    compile_standard_tables,
)

__all__ = [
    "Directory",
    "Component",
    "FeatureComponents",
    "File",
    "Property",
    "STANDARD_TABLES",
    "compile_standard_tables",
]
