# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Schema compilation from DAO definitions
# PURPOSE: Catalog, builder, resolver, validator, emitter and compiler
# CREATED: 18 OCT 2026
# ============================================================================

from msi_schema.schema.catalog import (
    PRIMARY_IDENTIFIER_CATEGORY,
    Category,
    CategoryCatalog,
    default_catalog,
)
from msi_schema.schema.fields import (
    DaoDefinition,
    FieldAttributes,
    FieldDefinition,
    FieldSpec,
    to_column_name,
)
from msi_schema.schema.values import Row, Value
from msi_schema.schema.resolver import TypeResolver
from msi_schema.schema.builder import FieldDescriptorBuilder
from msi_schema.schema.table import TableSchema
from msi_schema.schema.validator import SchemaValidator
from msi_schema.schema.emitter import (
    ConversionPair,
    DescriptorEmitter,
    MappingBinding,
    ModelBinding,
)
from msi_schema.schema.model_reader import (
    I16,
    I32,
    U16,
    U32,
    GeneratedIdentifier,
    Identifier,
    IntegerWidth,
    MsiColumn,
    definition_from_model,
)
from msi_schema.schema.compiler import (
    CompiledTable,
    SchemaCompiler,
    compile_all,
    compile_definition,
    compile_model,
)
from msi_schema.schema.identifiers import IdentifierGenerator
from msi_schema.schema.entries import TableEntries, table_entries
from msi_schema.schema.loader import definitions_from_mapping, load_definitions

__all__ = [
    # Catalog
    "PRIMARY_IDENTIFIER_CATEGORY",
    "Category",
    "CategoryCatalog",
    "default_catalog",
    # Definitions
    "DaoDefinition",
    "FieldAttributes",
    "FieldDefinition",
    "FieldSpec",
    "to_column_name",
    # Values
    "Row",
    "Value",
    # Pipeline
    "TypeResolver",
    "FieldDescriptorBuilder",
    "TableSchema",
    "SchemaValidator",
    "ConversionPair",
    "DescriptorEmitter",
    "MappingBinding",
    "ModelBinding",
    # Model front end
    "I16",
    "I32",
    "U16",
    "U32",
    "Identifier",
    "GeneratedIdentifier",
    "IntegerWidth",
    "MsiColumn",
    "definition_from_model",
    # Compiler
    "CompiledTable",
    "SchemaCompiler",
    "compile_all",
    "compile_definition",
    "compile_model",
    # Entries
    "IdentifierGenerator",
    "TableEntries",
    "table_entries",
    # Declarative
    "definitions_from_mapping",
    "load_definitions",
]
