# ============================================================================
# MSI SCHEMA COMPILER
# ============================================================================
# STATUS: Package root
# PURPOSE: Compile DAO types into MSI table schemas and row conversions
# CREATED: 18 OCT 2026
# ============================================================================
"""
MSI Schema Compiler

Turns a data-access-object (DAO) type description into an MSI table
schema descriptor plus to_row / from_row conversions between DAO
instances and generic value rows.

Usage:
    from msi_schema import SchemaCompiler
    from msi_schema.models import Property

    table = SchemaCompiler().compile_model(Property)
    row = table.to_row(Property(property="ProductName", value="Demo"))
    assert table.from_row(row) == Property(property="ProductName", value="Demo")
"""

from msi_schema.__version__ import __version__
from msi_schema.config import CompilerDefaults, get_defaults, reset_defaults
from msi_schema.contracts import SchemaRule, ShapeKind, ValueKind, ValueShape
from msi_schema.errors import (
    AmbiguousOrUnsupportedTypeError,
    ConversionError,
    DefinitionError,
    DuplicateEntryError,
    MsiSchemaError,
    NoGeneratedIdentifierError,
    RowShapeMismatchError,
    SchemaError,
    SchemaViolation,
    UnknownCategoryError,
)
from msi_schema.schema import (
    I16,
    I32,
    U16,
    U32,
    Category,
    CategoryCatalog,
    CompiledTable,
    ConversionPair,
    DaoDefinition,
    FieldAttributes,
    FieldDefinition,
    FieldSpec,
    GeneratedIdentifier,
    Identifier,
    IdentifierGenerator,
    MsiColumn,
    Row,
    SchemaCompiler,
    TableEntries,
    TableSchema,
    Value,
    compile_all,
    compile_definition,
    compile_model,
    default_catalog,
    definition_from_model,
    definitions_from_mapping,
    load_definitions,
    table_entries,
)

__all__ = [
    "__version__",
    # Config
    "CompilerDefaults",
    "get_defaults",
    "reset_defaults",
    # Contracts
    "SchemaRule",
    "ShapeKind",
    "ValueKind",
    "ValueShape",
    # Errors
    "MsiSchemaError",
    "UnknownCategoryError",
    "AmbiguousOrUnsupportedTypeError",
    "SchemaError",
    "SchemaViolation",
    "DefinitionError",
    "ConversionError",
    "RowShapeMismatchError",
    "DuplicateEntryError",
    "NoGeneratedIdentifierError",
    # Schema
    "Category",
    "CategoryCatalog",
    "default_catalog",
    "DaoDefinition",
    "FieldAttributes",
    "FieldDefinition",
    "FieldSpec",
    "TableSchema",
    "Value",
    "Row",
    "ConversionPair",
    "CompiledTable",
    "SchemaCompiler",
    "compile_definition",
    "compile_model",
    "compile_all",
    # Entries
    "IdentifierGenerator",
    "TableEntries",
    "table_entries",
    # Model front end
    "I16",
    "I32",
    "U16",
    "U32",
    "Identifier",
    "GeneratedIdentifier",
    "MsiColumn",
    "definition_from_model",
    # Declarative
    "definitions_from_mapping",
    "load_definitions",
]
