# ============================================================================
# CONVERSION EMITTER TESTS
# ============================================================================
# STATUS: Tests - Generated to_row / from_row
# PURPOSE: Verify round trips, null handling and conversion failures
# CREATED: 18 OCT 2026
# ============================================================================
"""
Conversion Emitter Tests

DAOs here are plain dicts (MappingBinding). Pydantic-model DAOs are
covered in test_compiler.py.

Run with:
    pytest tests/test_emitter.py -v
"""

import pytest

from msi_schema.contracts import ValueKind, ValueShape
from msi_schema.errors import ConversionError, RowShapeMismatchError
from msi_schema.schema.compiler import compile_definition
from msi_schema.schema.emitter import DescriptorEmitter
from msi_schema.schema.fields import DaoDefinition, FieldAttributes, FieldDefinition
from msi_schema.schema.values import Value


# ============================================================================
# HELPERS
# ============================================================================

def _field(name, shape, **attributes):
    return FieldDefinition(name=name, shape=shape, attributes=FieldAttributes(**attributes))


def _scenario_a():
    """{id: u16 key, name: text(64), flag: u16 nullable}"""
    return compile_definition(DaoDefinition(
        table_name="Widget",
        fields=(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("name", ValueShape.text(), width=64),
            _field("flag", ValueShape.unsigned_int(16), nullable=True),
        ),
    ))


def _blob_table():
    return compile_definition(DaoDefinition(
        table_name="Blob",
        fields=(
            _field("name", ValueShape.text(), explicit_category="Identifier", is_key=True),
            _field("data", ValueShape.binary(), nullable=True),
            _field("size", ValueShape.signed_int(32)),
        ),
    ))


# ============================================================================
# SCENARIO A
# ============================================================================

class TestScenarioA:
    """Three-column table with a u16 key and a nullable flag."""

    def test_schema_shape(self):
        table = _scenario_a()
        columns = table.schema.columns
        assert len(columns) == 3
        assert [c.is_key for c in columns] == [True, False, False]
        assert columns[0].nullable is False
        assert columns[2].nullable is True
        assert table.schema.type_codes == ["i2", "s64", "I2"]

    def test_round_trip(self):
        table = _scenario_a()
        dao = {"id": 1, "name": "Foo"}
        row = table.to_row(dao)
        assert row == [Value.integer(1), Value.string("Foo"), Value.null()]
        assert table.from_row(row) == dao

    def test_explicit_none_reads_as_absent(self):
        table = _scenario_a()
        row = table.to_row({"id": 1, "name": "Foo", "flag": None})
        assert row == table.to_row({"id": 1, "name": "Foo"})
        assert table.from_row(row) == {"id": 1, "name": "Foo"}

    def test_absent_non_nullable_field_fails(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="non-nullable") as exc_info:
            table.to_row({"id": 1})
        assert exc_info.value.column_name == "Name"

    def test_round_trip_with_flag(self):
        table = _scenario_a()
        dao = {"id": 65535, "name": "", "flag": 7}
        assert table.from_row(table.to_row(dao)) == dao


# ============================================================================
# SCENARIO D
# ============================================================================

class TestRowShape:
    """from_row checks the value count before anything else."""

    def test_row_one_value_short(self):
        table = _scenario_a()
        with pytest.raises(RowShapeMismatchError) as exc_info:
            table.from_row([Value.integer(1), Value.string("Foo")])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_row_too_long(self):
        table = _scenario_a()
        row = [Value.integer(1), Value.string("Foo"), Value.null(), Value.null()]
        with pytest.raises(RowShapeMismatchError):
            table.from_row(row)

    def test_row_shape_checked_before_values(self):
        table = _scenario_a()
        with pytest.raises(RowShapeMismatchError):
            table.from_row([Value.string("wrong"), Value.integer(2)])

    def test_row_shape_mismatch_is_conversion_error(self):
        table = _scenario_a()
        with pytest.raises(ConversionError):
            table.from_row([])


# ============================================================================
# TO_ROW FAILURES
# ============================================================================

class TestToRow:
    """Tests for generated to_row."""

    def test_missing_non_nullable_value(self):
        table = _scenario_a()
        with pytest.raises(ConversionError) as exc_info:
            table.to_row({"id": 1, "flag": 2})
        assert exc_info.value.column_name == "Name"

    def test_wrong_python_type(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="expected int"):
            table.to_row({"id": "1", "name": "Foo", "flag": None})

    def test_bool_is_not_an_integer(self):
        table = _scenario_a()
        with pytest.raises(ConversionError):
            table.to_row({"id": True, "name": "Foo", "flag": None})

    def test_integer_out_of_range(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="outside u16 range"):
            table.to_row({"id": 70000, "name": "Foo", "flag": None})

    def test_negative_unsigned(self):
        table = _scenario_a()
        with pytest.raises(ConversionError):
            table.to_row({"id": -1, "name": "Foo", "flag": None})

    def test_binary_column(self):
        table = _blob_table()
        row = table.to_row({"name": "Icon", "data": bytearray(b"\x00\x01"), "size": 2})
        assert row[1].kind == ValueKind.STREAM
        assert row[1].data == b"\x00\x01"

    def test_binary_column_rejects_text(self):
        table = _blob_table()
        with pytest.raises(ConversionError, match="expected bytes"):
            table.to_row({"name": "Icon", "data": "abc", "size": 2})


# ============================================================================
# FROM_ROW FAILURES
# ============================================================================

class TestFromRow:
    """Tests for generated from_row."""

    def test_null_in_non_nullable_column(self):
        table = _scenario_a()
        with pytest.raises(ConversionError) as exc_info:
            table.from_row([Value.integer(1), Value.null(), Value.null()])
        assert exc_info.value.column_name == "Name"

    def test_wrong_value_kind(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="expects integer value"):
            table.from_row([Value.string("1"), Value.string("Foo"), Value.null()])

    def test_integer_too_wide_for_column(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="outside u16 range"):
            table.from_row([Value.integer(1 << 20), Value.string("Foo"), Value.null()])

    def test_not_a_value(self):
        table = _scenario_a()
        with pytest.raises(ConversionError, match="expected Value"):
            table.from_row([1, "Foo", None])

    def test_binary_round_trip(self):
        table = _blob_table()
        dao = {"name": "Icon", "data": b"\x89PNG", "size": -4}
        assert table.from_row(table.to_row(dao)) == dao


# ============================================================================
# VALUES
# ============================================================================

class TestValue:
    """Tests for the Value tagged union."""

    def test_kind_and_data_must_agree(self):
        with pytest.raises(TypeError):
            Value(ValueKind.INTEGER, "1")
        with pytest.raises(TypeError):
            Value(ValueKind.INTEGER, True)
        with pytest.raises(TypeError):
            Value(ValueKind.NULL, 0)

    def test_null(self):
        assert Value.null().is_null
        assert not Value.integer(0).is_null


# ============================================================================
# EMITTER DIRECT USE
# ============================================================================

class TestDescriptorEmitter:
    """Tests for DescriptorEmitter against a compiled schema."""

    def test_emit_returns_pair(self):
        schema = _scenario_a().schema
        pair = DescriptorEmitter(schema).emit()
        assert pair.to_row({"id": 2, "name": "Bar", "flag": 1}) == [
            Value.integer(2),
            Value.string("Bar"),
            Value.integer(1),
        ]
