# ============================================================================
# SCHEMA VALIDATOR TESTS
# ============================================================================
# STATUS: Tests - Whole-table validation
# PURPOSE: Verify every rule and that all violations are reported together
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Validator Tests

Builds FieldSpecs through the real builder and checks the validator's
reported violations.

Run with:
    pytest tests/test_validator.py -v
"""

import pytest

from msi_schema.config import CompilerDefaults
from msi_schema.contracts import SchemaRule, ValueShape
from msi_schema.errors import SchemaError
from msi_schema.schema.builder import FieldDescriptorBuilder
from msi_schema.schema.catalog import default_catalog
from msi_schema.schema.fields import FieldAttributes, FieldDefinition
from msi_schema.schema.validator import SchemaValidator


# ============================================================================
# HELPERS
# ============================================================================

def _field(name, shape, **attributes):
    return FieldDefinition(name=name, shape=shape, attributes=FieldAttributes(**attributes))


def _specs(*fields):
    """Build FieldSpecs in declaration order."""
    builder = FieldDescriptorBuilder(default_catalog(CompilerDefaults()))
    return [builder.build("Widget", f, i) for i, f in enumerate(fields)]


def _rules(*fields):
    return [v.rule for v in SchemaValidator("Widget").collect(_specs(*fields))]


# ============================================================================
# VALID TABLES
# ============================================================================

class TestValidTables:
    """Tests for tables that pass validation."""

    def test_single_key(self):
        schema = SchemaValidator("Widget").validate(_specs(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("name", ValueShape.text(), width=64),
        ))
        assert schema.table_name == "Widget"
        assert [c.ordinal for c in schema.columns] == [0, 1]
        assert schema.key_indices == [0]

    def test_composite_key_prefix(self):
        schema = SchemaValidator("Widget").validate(_specs(
            _field("a", ValueShape.text(), explicit_category="Identifier", is_key=True,
                   foreign_key="A"),
            _field("b", ValueShape.text(), explicit_category="Identifier", is_key=True,
                   foreign_key="B"),
            _field("note", ValueShape.text(), nullable=True),
        ))
        assert schema.key_indices == [0, 1]
        assert schema.primary_identifier is None

    def test_ordinals_match_declaration_order(self):
        specs = _specs(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("b", ValueShape.text()),
            _field("c", ValueShape.signed_int(32)),
        )
        schema = SchemaValidator("Widget").validate(list(reversed(specs)))
        assert [c.field_name for c in schema.columns] == ["id", "b", "c"]
        assert all(c.ordinal == i for i, c in enumerate(schema.columns))


# ============================================================================
# INDIVIDUAL RULES
# ============================================================================

class TestRules:
    """Tests for each rule in isolation."""

    def test_no_fields(self):
        assert _rules() == [SchemaRule.NO_FIELDS]

    def test_no_key(self):
        assert _rules(_field("name", ValueShape.text())) == [SchemaRule.NO_KEY]

    def test_key_not_prefix(self):
        # name declared before the key
        violations = SchemaValidator("Widget").collect(_specs(
            _field("name", ValueShape.text()),
            _field("id", ValueShape.unsigned_int(16), is_key=True),
        ))
        assert [v.rule for v in violations] == [SchemaRule.KEY_NOT_PREFIX]
        assert violations[0].field_names == ("id",)
        assert "contiguous leading prefix" in violations[0].message

    def test_nullable_key(self):
        rules = _rules(_field("id", ValueShape.unsigned_int(16), is_key=True, nullable=True))
        assert rules == [SchemaRule.NULLABLE_KEY]

    def test_duplicate_field_name(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("id", ValueShape.text()),
        )
        assert SchemaRule.DUPLICATE_FIELD_NAME in rules

    def test_duplicate_column_name(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("name", ValueShape.text(), column_name="Id"),
        )
        assert rules == [SchemaRule.DUPLICATE_COLUMN_NAME]

    def test_declared_width_on_fixed_width_category(self):
        rules = _rules(_field("id", ValueShape.unsigned_int(16), is_key=True, width=4))
        assert rules == [SchemaRule.FIXED_WIDTH_DECLARED]

    def test_non_positive_width(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("name", ValueShape.text(), width=0),
        )
        assert rules == [SchemaRule.NON_POSITIVE_WIDTH]

    def test_explicit_category_shape_mismatch(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("count", ValueShape.unsigned_int(16), explicit_category="Identifier"),
        )
        assert rules == [SchemaRule.SHAPE_MISMATCH]

    def test_explicit_integer_width_mismatch(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("size", ValueShape.signed_int(32), explicit_category="Integer"),
        )
        assert rules == [SchemaRule.SHAPE_MISMATCH]

    def test_foreign_key_on_integer(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("ref", ValueShape.signed_int(32), foreign_key="Other"),
        )
        assert rules == [SchemaRule.SHAPE_MISMATCH]

    def test_multiple_primary_identifiers(self):
        rules = _rules(
            _field("a", ValueShape.text(), explicit_category="Identifier", is_key=True),
            _field("b", ValueShape.text(), explicit_category="Identifier", is_key=True),
        )
        assert rules == [SchemaRule.MULTIPLE_PRIMARY_IDENTIFIERS]

    def test_generated_primary_identifier(self):
        schema = SchemaValidator("Widget").validate(_specs(
            _field("widget", ValueShape.text(), explicit_category="Identifier", is_key=True,
                   generated=True),
            _field("name", ValueShape.text(), width=64),
        ))
        assert schema.primary_identifier.generated is True
        assert schema.identifier_generated is True

    def test_generated_on_non_key_field(self):
        rules = _rules(
            _field("id", ValueShape.unsigned_int(16), is_key=True),
            _field("alias", ValueShape.text(), explicit_category="Identifier", generated=True),
        )
        assert rules == [SchemaRule.GENERATED_NOT_PRIMARY_IDENTIFIER]

    def test_generated_on_foreign_key(self):
        rules = _rules(
            _field("parent", ValueShape.text(), explicit_category="Identifier", is_key=True,
                   foreign_key="Parent", generated=True),
        )
        assert rules == [SchemaRule.GENERATED_NOT_PRIMARY_IDENTIFIER]

    def test_generated_on_integer_key(self):
        rules = _rules(_field("id", ValueShape.unsigned_int(16), is_key=True, generated=True))
        assert rules == [SchemaRule.GENERATED_NOT_PRIMARY_IDENTIFIER]


# ============================================================================
# ERROR COMPLETENESS
# ============================================================================

class TestErrorCompleteness:
    """All violations are reported in one SchemaError."""

    def test_two_independent_violations(self):
        specs = _specs(
            _field("name", ValueShape.text(), width=0),
            _field("id", ValueShape.unsigned_int(16), is_key=True, nullable=True),
        )
        with pytest.raises(SchemaError) as exc_info:
            SchemaValidator("Widget").validate(specs)

        err = exc_info.value
        assert err.table_name == "Widget"
        assert set(err.rules) == {
            SchemaRule.KEY_NOT_PREFIX,
            SchemaRule.NULLABLE_KEY,
            SchemaRule.NON_POSITIVE_WIDTH,
        }
        assert "3 violation(s)" in str(err)

    def test_violation_names_table_and_fields(self):
        specs = _specs(_field("id", ValueShape.unsigned_int(16), is_key=True, nullable=True))
        with pytest.raises(SchemaError) as exc_info:
            SchemaValidator("Widget").validate(specs)

        violation = exc_info.value.violations[0]
        assert violation.table_name == "Widget"
        assert violation.field_names == ("id",)
        assert str(violation).startswith("Widget [id]: nullable_key")
