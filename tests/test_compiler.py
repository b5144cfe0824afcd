# ============================================================================
# SCHEMA COMPILER TESTS
# ============================================================================
# STATUS: Tests - End-to-end compilation
# PURPOSE: Verify the pipeline, multi-table compilation and standard tables
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Compiler Tests

End-to-end: definition or model in, CompiledTable out.

Run with:
    pytest tests/test_compiler.py -v
"""

from typing import ClassVar, Optional

import pytest
from pydantic import BaseModel, Field

from msi_schema.config import CompilerDefaults
from msi_schema.contracts import SchemaRule, ShapeKind, ValueKind, ValueShape
from msi_schema.errors import (
    AmbiguousOrUnsupportedTypeError,
    ConversionError,
    SchemaError,
    UnknownCategoryError,
)
from msi_schema.models import (
    Component,
    Directory,
    FeatureComponents,
    File,
    Property,
    STANDARD_TABLES,
    compile_standard_tables,
)
from msi_schema.schema.catalog import Category, CategoryCatalog
from msi_schema.schema.compiler import SchemaCompiler, compile_all, compile_model
from msi_schema.schema.fields import DaoDefinition, FieldAttributes, FieldDefinition
from msi_schema.schema.model_reader import U16
from msi_schema.schema.values import Value


# ============================================================================
# HELPERS
# ============================================================================

def _field(name, shape, **attributes):
    return FieldDefinition(name=name, shape=shape, attributes=FieldAttributes(**attributes))


def _compiler():
    return SchemaCompiler(defaults=CompilerDefaults())


class Widget(BaseModel):
    __msi_table__: ClassVar[str] = "Widget"
    __msi_primary_key__: ClassVar[str] = "id"

    id: U16
    name: str = Field(..., max_length=64)
    flag: Optional[U16] = None


# ============================================================================
# SCENARIO C
# ============================================================================

class TestUnknownCategory:
    """Explicit override naming a category the catalog lacks."""

    def test_bogus_category(self):
        definition = DaoDefinition(
            table_name="Widget",
            fields=(
                _field("id", ValueShape.unsigned_int(16), is_key=True),
                _field("kind", ValueShape.text(), explicit_category="Bogus"),
            ),
        )
        with pytest.raises(UnknownCategoryError) as exc_info:
            _compiler().compile_definition(definition)
        assert exc_info.value.table_name == "Widget"
        assert exc_info.value.field_name == "kind"
        assert exc_info.value.category_name == "Bogus"

    def test_ambiguous_type_aborts(self):
        definition = DaoDefinition(
            table_name="Widget",
            fields=(_field("stamp", ValueShape.other("datetime"), is_key=True),),
        )
        with pytest.raises(AmbiguousOrUnsupportedTypeError):
            _compiler().compile_definition(definition)


# ============================================================================
# MODEL COMPILATION
# ============================================================================

class TestCompileModel:
    """Tests for compiling Pydantic DAO models."""

    def test_scenario_a_model_round_trip(self):
        table = _compiler().compile_model(Widget)
        dao = Widget(id=1, name="Foo", flag=None)

        row = table.to_row(dao)
        assert row == [Value.integer(1), Value.string("Foo"), Value.null()]

        rebuilt = table.from_row(row)
        assert isinstance(rebuilt, Widget)
        assert rebuilt == dao
        assert table.dao_type is Widget

    def test_model_rejects_rebuilt_values(self):
        table = _compiler().compile_model(Widget)
        row = [Value.integer(1), Value.string("x" * 65), Value.null()]
        with pytest.raises(ConversionError) as exc_info:
            table.from_row(row)
        assert exc_info.value.column_name == "Name"

    def test_module_level_compile_model(self):
        table = compile_model(Widget)
        assert table.table_name == "Widget"

    def test_compile_dispatches_on_input(self):
        compiler = _compiler()
        assert compiler.compile(Widget).dao_type is Widget
        definition = DaoDefinition(
            table_name="Plain",
            fields=(_field("id", ValueShape.unsigned_int(16), is_key=True),),
        )
        assert compiler.compile(definition).dao_type is None

    def test_substitute_catalog(self):
        catalog = CategoryCatalog([
            Category(
                name="Short",
                accepted_shapes=frozenset({ShapeKind.UNSIGNED_INT}),
                value_kind=ValueKind.INTEGER,
                fixed_width=16,
                inferable=True,
            ),
            Category(
                name="Text",
                accepted_shapes=frozenset({ShapeKind.TEXT}),
                value_kind=ValueKind.STRING,
                default_width=64,
                inferable=True,
            ),
        ])
        table = SchemaCompiler(catalog=catalog, defaults=CompilerDefaults()).compile_model(Widget)
        assert [c.category.name for c in table.schema.columns] == ["Short", "Text", "Short"]


# ============================================================================
# KEYS AND CONFLICTS
# ============================================================================

class TestKeys:
    """Tests for key_of, conflicts and primary_identifier."""

    def test_single_key(self):
        table = _compiler().compile_model(Directory)
        a = Directory(directory="INSTALLDIR", parent_directory="TARGETDIR", default_dir="App")
        b = Directory(directory="INSTALLDIR", default_dir="Other")
        c = Directory(directory="BINDIR", parent_directory="INSTALLDIR", default_dir="bin")

        assert table.key_of(a) == ("INSTALLDIR",)
        assert table.conflicts(a, b) is True
        assert table.conflicts(a, c) is False
        assert table.primary_identifier(c) == "BINDIR"

    def test_composite_key(self):
        table = _compiler().compile_model(FeatureComponents)
        a = FeatureComponents(feature_="Main", component_="Core")
        b = FeatureComponents(feature_="Main", component_="Docs")

        assert table.schema.key_indices == [0, 1]
        assert table.conflicts(a, b) is False
        assert table.conflicts(a, FeatureComponents(feature_="Main", component_="Core")) is True
        assert table.primary_identifier(a) is None

    def test_key_of_dict_dao(self):
        definition = DaoDefinition(
            table_name="Plain",
            fields=(
                _field("id", ValueShape.unsigned_int(16), is_key=True),
                _field("name", ValueShape.text()),
            ),
        )
        table = _compiler().compile_definition(definition)
        assert table.key_of({"id": 4, "name": "x"}) == (4,)
        assert table.primary_identifier({"id": 4, "name": "x"}) is None


# ============================================================================
# MULTI-TABLE COMPILATION
# ============================================================================

class TestCompileAll:
    """Tests for compile_all()."""

    def test_collects_every_failure(self):
        bad_prefix = DaoDefinition(
            table_name="BadPrefix",
            fields=(
                _field("name", ValueShape.text()),
                _field("id", ValueShape.unsigned_int(16), is_key=True),
            ),
        )
        bad_category = DaoDefinition(
            table_name="BadCategory",
            fields=(
                _field("id", ValueShape.unsigned_int(16), is_key=True),
                _field("kind", ValueShape.text(), explicit_category="Bogus"),
            ),
        )

        with pytest.raises(SchemaError) as exc_info:
            _compiler().compile_all([Widget, bad_prefix, bad_category])

        err = exc_info.value
        assert err.rules == [SchemaRule.KEY_NOT_PREFIX, SchemaRule.UNKNOWN_CATEGORY]
        assert {v.table_name for v in err.violations} == {"BadPrefix", "BadCategory"}
        assert err.violations[1].field_names == ("kind",)

    def test_duplicate_table_rejected(self):
        with pytest.raises(SchemaError) as exc_info:
            compile_all([Widget, Widget])
        assert exc_info.value.rules == [SchemaRule.DUPLICATE_TABLE]

    def test_invalid_definition_folded(self):
        class Broken(BaseModel):
            __msi_primary_key__: ClassVar[str] = "missing"
            name: str

        with pytest.raises(SchemaError) as exc_info:
            _compiler().compile_all([Broken])
        assert exc_info.value.rules == [SchemaRule.INVALID_DEFINITION]
        assert exc_info.value.violations[0].table_name == "Broken"

    def test_returns_tables_in_order(self):
        plain = DaoDefinition(
            table_name="Plain",
            fields=(_field("id", ValueShape.unsigned_int(16), is_key=True),),
        )
        tables = _compiler().compile_all([plain, Widget])
        assert list(tables) == ["Plain", "Widget"]


# ============================================================================
# STANDARD TABLES
# ============================================================================

class TestStandardTables:
    """The shipped table models compile and round-trip."""

    def setup_method(self):
        self.tables = compile_standard_tables(_compiler())

    def test_all_compile(self):
        assert list(self.tables) == [m.__msi_table__ for m in STANDARD_TABLES]

    def test_directory_columns(self):
        schema = self.tables["Directory"].schema
        assert schema.to_dict() == {
            "name": "Directory",
            "primary_key": ["Directory"],
            "columns": [
                {
                    "name": "Directory",
                    "category": "Identifier",
                    "type": "s72",
                    "width": 72,
                    "nullable": False,
                    "primary_key": True,
                },
                {
                    "name": "Directory_Parent",
                    "category": "Identifier",
                    "type": "S72",
                    "width": 72,
                    "nullable": True,
                    "primary_key": False,
                    "foreign_key": {"table": "Directory", "column": 0},
                },
                {
                    "name": "DefaultDir",
                    "category": "DefaultDir",
                    "type": "l255",
                    "width": 255,
                    "nullable": False,
                    "primary_key": False,
                    "localizable": True,
                },
            ],
        }

    def test_component_type_codes(self):
        schema = self.tables["Component"].schema
        assert schema.column_names == [
            "Component", "ComponentId", "Directory_", "Attributes", "Condition", "KeyPath",
        ]
        assert schema.type_codes == ["s72", "S38", "s72", "i2", "S255", "S72"]

    def test_file_type_codes(self):
        schema = self.tables["File"].schema
        assert schema.type_codes == ["s72", "s72", "l255", "i4", "S72", "S20", "I2", "i4"]

    def test_file_round_trip(self):
        table = self.tables["File"]
        dao = File(
            file="app.exe",
            component_="Core",
            file_name="app.exe",
            file_size=123456,
            version="1.0.0.0",
            sequence=1,
        )
        assert table.from_row(table.to_row(dao)) == dao

    def test_component_round_trip(self):
        table = self.tables["Component"]
        dao = Component(
            component="Core",
            component_id="{12345678-1234-1234-1234-123456789012}",
            directory_="INSTALLDIR",
            attributes=256,
        )
        assert table.from_row(table.to_row(dao)) == dao

    def test_property_round_trip(self):
        table = self.tables["Property"]
        dao = Property(property="ProductName", value="Demo")
        assert table.to_row(dao) == [Value.string("ProductName"), Value.string("Demo")]
        assert table.from_row(table.to_row(dao)) == dao
