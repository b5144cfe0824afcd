# ============================================================================
# SCHEMA VALIDATOR
# ============================================================================
# STATUS: Core - Whole-table validation pass
# PURPOSE: Check per-field and cross-field rules, report every violation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Validator

Consumes the ordered FieldSpecs of one DAO type and checks:

  - non-empty field list
  - unique field names (and unique column names)
  - at least one key field
  - key fields form the leading prefix by ordinal
  - key fields are not nullable
  - width sanity (no declared width on fixed-width categories,
    positive width on variable-width categories)
  - shape/category compatibility, also for explicit overrides
  - at most one primary identifier
  - only the primary identifier may be generated

Collects ALL violations before failing, so one build reports every
defect at once instead of making the author fix them one at a time.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from msi_schema.contracts import SchemaRule, ShapeKind
from msi_schema.errors import SchemaError, SchemaViolation
from msi_schema.logging import ComponentType, get_logger
from msi_schema.schema.catalog import PRIMARY_IDENTIFIER_CATEGORY
from msi_schema.schema.fields import FieldSpec
from msi_schema.schema.table import TableSchema

logger = get_logger(__name__, ComponentType.VALIDATOR)


class SchemaValidator:
    """
    Validate the FieldSpecs of one table.

    This class NEVER mutates specs; it only reports.
    """

    def __init__(self, table_name: str):
        self.table_name = table_name

    def _violation(self, rule: SchemaRule, message: str, *field_names: str) -> SchemaViolation:
        return SchemaViolation(
            table_name=self.table_name,
            rule=rule,
            field_names=tuple(field_names),
            message=message,
        )

    # ------------------------------------------------------------------
    # Table-level checks
    # ------------------------------------------------------------------

    def check_not_empty(self, specs: Sequence[FieldSpec]) -> List[SchemaViolation]:
        if specs:
            return []
        return [self._violation(SchemaRule.NO_FIELDS, "table must declare at least one field")]

    def check_unique_names(self, specs: Sequence[FieldSpec]) -> List[SchemaViolation]:
        violations = []

        by_field: Dict[str, List[FieldSpec]] = defaultdict(list)
        for spec in specs:
            by_field[spec.field_name].append(spec)
        for name, group in by_field.items():
            if len(group) > 1:
                violations.append(self._violation(
                    SchemaRule.DUPLICATE_FIELD_NAME,
                    f"field '{name}' is declared {len(group)} times",
                    name,
                ))

        # Column overrides can collide even when field names differ
        by_column: Dict[str, List[FieldSpec]] = defaultdict(list)
        for spec in specs:
            by_column[spec.column_name].append(spec)
        for column_name, group in by_column.items():
            field_names = sorted({s.field_name for s in group})
            if len(field_names) > 1:
                violations.append(self._violation(
                    SchemaRule.DUPLICATE_COLUMN_NAME,
                    f"column name '{column_name}' is used by several fields",
                    *field_names,
                ))

        return violations

    def check_keys(self, specs: Sequence[FieldSpec]) -> List[SchemaViolation]:
        if not specs:
            return []

        ordered = sorted(specs, key=lambda s: s.ordinal)
        keys = [s for s in ordered if s.is_key]
        if not keys:
            return [self._violation(
                SchemaRule.NO_KEY,
                "table must mark at least one field as a key",
            )]

        violations = []

        prefix_len = 0
        for spec in ordered:
            if not spec.is_key:
                break
            prefix_len += 1
        misplaced = [s.field_name for s in ordered[prefix_len:] if s.is_key]
        if misplaced:
            violations.append(self._violation(
                SchemaRule.KEY_NOT_PREFIX,
                "key fields must be declared before all non-key fields "
                "(key fields not a contiguous leading prefix)",
                *misplaced,
            ))

        for spec in keys:
            if spec.nullable:
                violations.append(self._violation(
                    SchemaRule.NULLABLE_KEY,
                    "key fields may not be nullable",
                    spec.field_name,
                ))

        primary = [
            s.field_name for s in keys
            if s.category.name == PRIMARY_IDENTIFIER_CATEGORY and not s.foreign_key
        ]
        if len(primary) > 1:
            violations.append(self._violation(
                SchemaRule.MULTIPLE_PRIMARY_IDENTIFIERS,
                "more than one key Identifier field that is not a foreign key",
                *primary,
            ))

        return violations

    # ------------------------------------------------------------------
    # Column-level checks
    # ------------------------------------------------------------------

    def check_generated(self, spec: FieldSpec) -> List[SchemaViolation]:
        if not spec.generated:
            return []
        if (
            spec.is_key
            and spec.category.name == PRIMARY_IDENTIFIER_CATEGORY
            and not spec.foreign_key
        ):
            return []
        return [self._violation(
            SchemaRule.GENERATED_NOT_PRIMARY_IDENTIFIER,
            "only a key Identifier field that is not a foreign key can be generated",
            spec.field_name,
        )]

    def check_width(self, spec: FieldSpec) -> List[SchemaViolation]:
        category = spec.category
        if category.is_fixed_width:
            if spec.declared_width is not None:
                return [self._violation(
                    SchemaRule.FIXED_WIDTH_DECLARED,
                    f"category {category.name} has a fixed width; "
                    f"declared width {spec.declared_width} contradicts it",
                    spec.field_name,
                )]
            return []
        if spec.width <= 0:
            return [self._violation(
                SchemaRule.NON_POSITIVE_WIDTH,
                f"category {category.name} needs a positive width, got {spec.width}",
                spec.field_name,
            )]
        return []

    def check_shape(self, spec: FieldSpec) -> List[SchemaViolation]:
        category = spec.category
        shape = spec.value_shape
        violations = []

        if shape.kind not in category.accepted_shapes:
            accepted = ", ".join(sorted(k.value for k in category.accepted_shapes))
            violations.append(self._violation(
                SchemaRule.SHAPE_MISMATCH,
                f"category {category.name} does not accept {shape.describe()} "
                f"(accepts: {accepted})",
                spec.field_name,
            ))
        elif shape.kind.is_integer() and category.is_fixed_width and shape.width != category.fixed_width:
            violations.append(self._violation(
                SchemaRule.SHAPE_MISMATCH,
                f"{shape.describe()} does not fit {category.name} "
                f"({category.fixed_width}-bit)",
                spec.field_name,
            ))

        if spec.foreign_key and shape.kind != ShapeKind.TEXT:
            violations.append(self._violation(
                SchemaRule.SHAPE_MISMATCH,
                f"foreign key to '{spec.foreign_key}' requires a text-like field, "
                f"got {shape.describe()}",
                spec.field_name,
            ))

        return violations

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def collect(self, specs: Sequence[FieldSpec]) -> List[SchemaViolation]:
        """Run every rule and return all violations (empty if valid)."""
        violations: List[SchemaViolation] = []
        violations.extend(self.check_not_empty(specs))
        violations.extend(self.check_unique_names(specs))
        violations.extend(self.check_keys(specs))
        for spec in specs:
            violations.extend(self.check_width(spec))
            violations.extend(self.check_shape(spec))
            violations.extend(self.check_generated(spec))
        return violations

    def validate(self, specs: Sequence[FieldSpec]) -> TableSchema:
        """
        Validate specs and return the TableSchema.

        Raises:
            SchemaError: carrying every violation found
        """
        violations = self.collect(specs)
        if violations:
            logger.warning(
                f"Schema for {self.table_name} rejected with {len(violations)} violation(s)",
                extra={"rules": [v.rule.value for v in violations]},
            )
            raise SchemaError(self.table_name, violations)

        columns = tuple(sorted(specs, key=lambda s: s.ordinal))
        return TableSchema(table_name=self.table_name, columns=columns)


__all__ = ["SchemaValidator"]
