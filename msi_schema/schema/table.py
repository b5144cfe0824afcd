# ============================================================================
# TABLE SCHEMA DESCRIPTOR
# ============================================================================
# STATUS: Core - Validated table descriptor
# PURPOSE: Ordered column descriptor handed to the installer-database engine
# CREATED: 18 OCT 2026
# EXPORTS: TableSchema
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Schema

Immutable, validated descriptor of one installer table:
    - columns in declaration order (columns[i].ordinal == i)
    - key columns form the leading prefix
    - key columns are never nullable

Only SchemaValidator constructs these for compiled tables.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel

from msi_schema.schema.catalog import PRIMARY_IDENTIFIER_CATEGORY
from msi_schema.schema.fields import FieldSpec


class TableSchema(BaseModel):
    """Ordered column descriptor of one table."""
    table_name: str
    columns: Tuple[FieldSpec, ...]

    model_config = {"frozen": True}

    @property
    def key_columns(self) -> List[FieldSpec]:
        return [c for c in self.columns if c.is_key]

    @property
    def key_indices(self) -> List[int]:
        return [c.ordinal for c in self.columns if c.is_key]

    @property
    def column_names(self) -> List[str]:
        return [c.column_name for c in self.columns]

    @property
    def type_codes(self) -> List[str]:
        return [c.type_code for c in self.columns]

    @property
    def primary_identifier(self) -> Optional[FieldSpec]:
        """Key Identifier column that is not a foreign key, if any."""
        for column in self.columns:
            if (
                column.is_key
                and column.category.name == PRIMARY_IDENTIFIER_CATEGORY
                and not column.foreign_key
            ):
                return column
        return None

    @property
    def identifier_generated(self) -> bool:
        """True when the primary identifier is marked generated."""
        primary = self.primary_identifier
        return primary is not None and primary.generated

    def column(self, name: str) -> FieldSpec:
        """Look up a column by column name or field name."""
        for column in self.columns:
            if column.column_name == name or column.field_name == name:
                return column
        raise KeyError(f"{self.table_name} has no column '{name}'")

    def to_dict(self) -> dict:
        """Schema descriptor for registration with the engine's table catalog."""
        return {
            "name": self.table_name,
            "primary_key": [c.column_name for c in self.key_columns],
            "columns": [c.to_dict() for c in self.columns],
        }


__all__ = ["TableSchema"]
