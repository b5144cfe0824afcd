# ============================================================================
# SCHEMA COMPILER
# ============================================================================
# STATUS: Core - Pipeline entry point
# PURPOSE: DAO definition -> builder -> validator -> emitter -> CompiledTable
# CREATED: 18 OCT 2026
# EXPORTS: CompiledTable, SchemaCompiler, compile_definition, compile_model, compile_all
# ============================================================================
"""
Schema Compiler

Runs the full pipeline for one DAO type:

    DaoDefinition
        -> FieldDescriptorBuilder (per field, via TypeResolver)
        -> SchemaValidator (all violations, one SchemaError)
        -> DescriptorEmitter
        -> CompiledTable {schema, to_row, from_row}

Build-time errors abort compilation of that DAO type. compile_all()
compiles several types and folds every table's failure into one
aggregated SchemaError.

Usage:
    from msi_schema import SchemaCompiler

    compiler = SchemaCompiler()
    table = compiler.compile_model(Property)
    row = table.to_row(Property(property="ProductName", value="Demo"))
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Type, Union

from pydantic import BaseModel

from msi_schema.config import CompilerDefaults, get_defaults
from msi_schema.contracts import SchemaRule
from msi_schema.errors import (
    AmbiguousOrUnsupportedTypeError,
    ConversionError,
    DefinitionError,
    SchemaError,
    SchemaViolation,
    UnknownCategoryError,
)
from msi_schema.logging import ComponentType, get_logger, log_checkpoint, log_context
from msi_schema.schema.builder import FieldDescriptorBuilder
from msi_schema.schema.catalog import CategoryCatalog, default_catalog
from msi_schema.schema.emitter import ConversionPair, DescriptorEmitter, MappingBinding, ModelBinding
from msi_schema.schema.fields import DaoDefinition, FieldSpec
from msi_schema.schema.identifiers import IdentifierGenerator
from msi_schema.schema.model_reader import definition_from_model
from msi_schema.schema.table import TableSchema
from msi_schema.schema.validator import SchemaValidator
from msi_schema.schema.values import Row, Value

logger = get_logger(__name__, ComponentType.COMPILER)

CompileInput = Union[DaoDefinition, Type[BaseModel]]


# ============================================================================
# COMPILED TABLE
# ============================================================================

class CompiledTable:
    """
    Result of compiling one DAO type.

    Holds the validated TableSchema, the generated conversions and the
    binding used to read DAO fields. Key comparison and identifier
    generation build on the schema's key columns.
    """

    def __init__(
        self,
        schema: TableSchema,
        conversions: ConversionPair,
        binding=None,
        dao_type: Optional[type] = None,
    ):
        self.schema = schema
        self.conversions = conversions
        self.binding = binding or MappingBinding()
        self.dao_type = dao_type

    def __repr__(self) -> str:
        return f"CompiledTable({self.table_name!r}, columns={self.schema.column_names})"

    @property
    def table_name(self) -> str:
        return self.schema.table_name

    def to_row(self, dao: Any) -> Row:
        return self.conversions.to_row(dao)

    def from_row(self, row: Sequence[Value]) -> Any:
        return self.conversions.from_row(row)

    def _read(self, dao: Any, spec: FieldSpec) -> Any:
        try:
            return self.binding.get(dao, spec.field_name)
        except AttributeError as e:
            raise ConversionError(
                self.table_name, spec.column_name, f"DAO has no field '{spec.field_name}'"
            ) from e

    def key_of(self, dao: Any) -> Tuple[Any, ...]:
        """Values of the key fields, in column order."""
        return tuple(self._read(dao, spec) for spec in self.schema.key_columns)

    def conflicts(self, a: Any, b: Any) -> bool:
        """Two DAOs conflict when every key field is equal."""
        return self.key_of(a) == self.key_of(b)

    def primary_identifier(self, dao: Any) -> Optional[Any]:
        """Value of the primary identifier column, None if the table has none."""
        spec = self.schema.primary_identifier
        if spec is None:
            return None
        return self._read(dao, spec)

    def identifier_generator(self, used: Optional[Set[str]] = None) -> Optional[IdentifierGenerator]:
        """
        Generator for the primary identifier, prefixed with the upper-cased
        table name. None unless the primary identifier is marked generated.

        Args:
            used: Identifiers already taken, shared across the database
        """
        if not self.schema.identifier_generated:
            return None
        return IdentifierGenerator(self.table_name.upper(), used)


# ============================================================================
# COMPILER
# ============================================================================

class SchemaCompiler:
    """
    Compile DAO definitions against one catalog.

    The catalog is immutable; a single compiler can be reused for any
    number of tables.
    """

    def __init__(
        self,
        catalog: Optional[CategoryCatalog] = None,
        defaults: Optional[CompilerDefaults] = None,
    ):
        self.defaults = defaults or get_defaults()
        self.catalog = catalog or default_catalog(self.defaults)
        self.builder = FieldDescriptorBuilder(self.catalog)

    def build_fields(self, definition: DaoDefinition) -> List[FieldSpec]:
        """
        Resolve every field of a definition, in declaration order.

        Raises:
            UnknownCategoryError: explicit category not in catalog
            AmbiguousOrUnsupportedTypeError: inference failed
        """
        specs = []
        for ordinal, field in enumerate(definition.fields):
            with log_context(field=field.name):
                specs.append(self.builder.build(definition.table_name, field, ordinal))
        return specs

    def compile_definition(self, definition: DaoDefinition, binding=None) -> CompiledTable:
        """
        Compile one DAO definition.

        Args:
            definition: Ordered field list of the DAO type
            binding: How DAOs are read and rebuilt (dicts by default)

        Returns:
            CompiledTable

        Raises:
            UnknownCategoryError, AmbiguousOrUnsupportedTypeError, SchemaError
        """
        with log_context(table=definition.table_name, operation="compile"):
            specs = self.build_fields(definition)
            schema = SchemaValidator(definition.table_name).validate(specs)
            conversions = DescriptorEmitter(schema, binding).emit()

            logger.info(
                f"Compiled table {schema.table_name}: {len(schema.columns)} column(s), "
                f"key={[c.column_name for c in schema.key_columns]}"
            )
            return CompiledTable(schema, conversions, binding)

    def compile_model(self, model: Type[BaseModel]) -> CompiledTable:
        """
        Compile a Pydantic DAO model. from_row returns model instances.

        Raises:
            DefinitionError: model metadata is malformed
            UnknownCategoryError, AmbiguousOrUnsupportedTypeError, SchemaError
        """
        definition = definition_from_model(model, self.defaults)
        table = self.compile_definition(definition, ModelBinding(model))
        table.dao_type = model
        return table

    def compile(self, item: CompileInput) -> CompiledTable:
        """Compile a DaoDefinition or a Pydantic model class."""
        if isinstance(item, DaoDefinition):
            return self.compile_definition(item)
        return self.compile_model(item)

    def compile_all(self, items: Iterable[CompileInput]) -> Dict[str, CompiledTable]:
        """
        Compile several DAO types.

        Every table is attempted; all failures are collected and raised
        together.

        Returns:
            Dict of table name -> CompiledTable, in input order

        Raises:
            SchemaError: aggregated violations of every failed table,
                including duplicate table names
        """
        tables: Dict[str, CompiledTable] = {}
        violations: List[SchemaViolation] = []
        failed: List[str] = []

        for item in items:
            name = _input_name(item)
            try:
                table = self.compile(item)
            except SchemaError as e:
                violations.extend(e.violations)
                failed.append(e.table_name)
                continue
            except (UnknownCategoryError, AmbiguousOrUnsupportedTypeError, DefinitionError) as e:
                violations.append(_violation_from_error(name, e))
                failed.append(name)
                continue

            if table.table_name in tables:
                violations.append(SchemaViolation(
                    table_name=table.table_name,
                    rule=SchemaRule.DUPLICATE_TABLE,
                    message=f"table '{table.table_name}' is defined more than once",
                ))
                failed.append(table.table_name)
                continue
            tables[table.table_name] = table

        if violations:
            failed_names = ", ".join(dict.fromkeys(failed))
            logger.warning(
                f"{len(failed)} table(s) failed to compile: {failed_names}",
                extra={"rules": [v.rule.value for v in violations]},
            )
            raise SchemaError(failed_names, violations)

        log_checkpoint("tables_compiled", tables=list(tables))
        return tables


def _input_name(item: CompileInput) -> str:
    if isinstance(item, DaoDefinition):
        return item.table_name
    return getattr(item, "__msi_table__", None) or getattr(item, "__name__", repr(item))


def _violation_from_error(table_name: str, error: Exception) -> SchemaViolation:
    if isinstance(error, UnknownCategoryError):
        return SchemaViolation(
            table_name=error.table_name,
            rule=SchemaRule.UNKNOWN_CATEGORY,
            field_names=(error.field_name,),
            message=str(error),
        )
    if isinstance(error, AmbiguousOrUnsupportedTypeError):
        return SchemaViolation(
            table_name=error.table_name,
            rule=SchemaRule.UNRESOLVED_TYPE,
            field_names=(error.field_name,),
            message=str(error),
        )
    return SchemaViolation(
        table_name=table_name,
        rule=SchemaRule.INVALID_DEFINITION,
        message=str(error),
    )


# ============================================================================
# MODULE-LEVEL SHORTCUTS
# ============================================================================

def compile_definition(
    definition: DaoDefinition,
    catalog: Optional[CategoryCatalog] = None,
    binding=None,
) -> CompiledTable:
    """Compile one DaoDefinition with a default (or given) catalog."""
    return SchemaCompiler(catalog).compile_definition(definition, binding)


def compile_model(
    model: Type[BaseModel],
    catalog: Optional[CategoryCatalog] = None,
) -> CompiledTable:
    """Compile one Pydantic DAO model with a default (or given) catalog."""
    return SchemaCompiler(catalog).compile_model(model)


def compile_all(
    items: Iterable[CompileInput],
    catalog: Optional[CategoryCatalog] = None,
) -> Dict[str, CompiledTable]:
    """Compile several DAO types, raising one aggregated SchemaError."""
    return SchemaCompiler(catalog).compile_all(items)


__all__ = [
    "CompiledTable",
    "SchemaCompiler",
    "compile_definition",
    "compile_model",
    "compile_all",
]
