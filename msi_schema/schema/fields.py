# ============================================================================
# FIELD & DEFINITION RECORDS
# ============================================================================
# STATUS: Core - Compiler input and per-column records
# PURPOSE: FieldAttributes, FieldDefinition, DaoDefinition, FieldSpec
# CREATED: 18 OCT 2026
# EXPORTS: FieldAttributes, FieldDefinition, DaoDefinition, FieldSpec, to_column_name
# DEPENDENCIES: pydantic
# ============================================================================
"""
Field & Definition Records

Input side (type-independent, produced by any front end):
    DaoDefinition(table_name, fields=[FieldDefinition(name, shape, attributes)])

Resolved side (produced by the Field Descriptor Builder):
    FieldSpec - one normalized column
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field

from msi_schema.contracts import ValueShape
from msi_schema.schema.catalog import Category


def to_column_name(field_name: str) -> str:
    """
    Default column name for a field: snake_case to PascalCase.

    A trailing underscore is kept, as in MSI foreign-key columns
    ('component_' -> 'Component_').
    """
    parts = [p for p in field_name.split("_") if p]
    name = "".join(p[:1].upper() + p[1:] for p in parts)
    if field_name.endswith("_"):
        name += "_"
    return name


class FieldAttributes(BaseModel):
    """
    Optional per-field overrides supplied by the DAO author.

    Unset entries fall back to the resolved category's defaults.
    """
    explicit_category: Optional[str] = None
    nullable: Optional[bool] = None
    is_key: Optional[bool] = None
    is_localizable: Optional[bool] = None
    width: Optional[int] = None
    column_name: Optional[str] = None
    foreign_key: Optional[str] = Field(default=None, description="Referenced table name")
    generated: Optional[bool] = Field(
        default=None, description="Primary identifier values are generated per table"
    )

    model_config = {"frozen": True}


class FieldDefinition(BaseModel):
    """One declared DAO field."""
    name: str
    shape: ValueShape
    attributes: FieldAttributes = Field(default_factory=FieldAttributes)

    model_config = {"frozen": True}


class DaoDefinition(BaseModel):
    """Ordered field list of one DAO type."""
    table_name: str
    fields: Tuple[FieldDefinition, ...] = ()

    model_config = {"frozen": True}


class FieldSpec(BaseModel):
    """
    Resolved, normalized description of one column.

    ordinal is the field's declaration index and fixes column order.
    declared_width is the width the author wrote (None if not given);
    width is the effective width after defaults. generated marks a
    primary identifier whose values an IdentifierGenerator can supply.
    """
    field_name: str
    column_name: str
    value_shape: ValueShape
    category: Category
    width: int
    declared_width: Optional[int] = None
    nullable: bool
    is_key: bool
    is_localizable: bool
    foreign_key: Optional[str] = None
    generated: bool = False
    ordinal: int

    model_config = {"frozen": True}

    @property
    def type_code(self) -> str:
        return self.category.type_code(self.width, self.nullable, self.is_localizable)

    def to_dict(self) -> dict:
        """Column definition in the engine's expected shape."""
        column = {
            "name": self.column_name,
            "category": self.category.name,
            "type": self.type_code,
            "width": self.width,
            "nullable": self.nullable,
            "primary_key": self.is_key,
        }
        if self.is_localizable:
            column["localizable"] = True
        if self.foreign_key:
            column["foreign_key"] = {"table": self.foreign_key, "column": 0}
        return column


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "to_column_name",
    "FieldAttributes",
    "FieldDefinition",
    "DaoDefinition",
    "FieldSpec",
]
