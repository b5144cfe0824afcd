# ============================================================================
# COMPILER EXCEPTIONS
# ============================================================================
# STATUS: Foundation - Build-time and runtime error types
# PURPOSE: Structured errors naming table, field, column and violated rule
# CREATED: 18 OCT 2026
# ============================================================================
"""
Compiler Exceptions

Build-time (abort compilation of one DAO type):
    UnknownCategoryError, AmbiguousOrUnsupportedTypeError, SchemaError,
    DefinitionError

Runtime (raised by generated conversions):
    ConversionError, RowShapeMismatchError

Runtime (raised by table entry containers):
    DuplicateEntryError, NoGeneratedIdentifierError

SchemaError carries every SchemaViolation found in one validation pass.
"""

from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel

from msi_schema.contracts import SchemaRule


# ============================================================================
# VIOLATION RECORD
# ============================================================================

class SchemaViolation(BaseModel):
    """One violated schema rule."""
    table_name: str
    rule: SchemaRule
    field_names: Tuple[str, ...] = ()
    message: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        fields = f" [{', '.join(self.field_names)}]" if self.field_names else ""
        return f"{self.table_name}{fields}: {self.rule.value}: {self.message}"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class MsiSchemaError(Exception):
    """Base exception for all compiler errors."""
    pass


class UnknownCategoryError(MsiSchemaError):
    """Raised when an explicit category override is not in the catalog."""
    def __init__(self, table_name: str, field_name: str, category_name: str):
        self.table_name = table_name
        self.field_name = field_name
        self.category_name = category_name
        super().__init__(
            f"{table_name}.{field_name}: unknown category '{category_name}'"
        )


class AmbiguousOrUnsupportedTypeError(MsiSchemaError):
    """Raised when category inference finds zero or several candidates."""
    def __init__(
        self,
        table_name: str,
        field_name: str,
        shape_description: str,
        candidates: Sequence[str] = (),
    ):
        self.table_name = table_name
        self.field_name = field_name
        self.shape_description = shape_description
        self.candidates = list(candidates)
        if self.candidates:
            detail = f"ambiguous, candidates: {', '.join(self.candidates)}"
        else:
            detail = "no category accepts this type"
        super().__init__(
            f"{table_name}.{field_name}: cannot infer category for "
            f"{shape_description} ({detail}); set an explicit category"
        )


class SchemaError(MsiSchemaError):
    """Raised when one or more schema rules are violated."""
    def __init__(self, table_name: str, violations: List[SchemaViolation]):
        self.table_name = table_name
        self.violations = list(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(
            f"Schema for '{table_name}' has {len(self.violations)} violation(s):\n{lines}"
        )

    @property
    def rules(self) -> List[SchemaRule]:
        return [v.rule for v in self.violations]


class DefinitionError(MsiSchemaError):
    """Raised when a DAO definition (model or document) cannot be read."""
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class ConversionError(MsiSchemaError):
    """Raised when a value cannot be converted to or from its column."""
    def __init__(self, table_name: str, column_name: Optional[str], message: str):
        self.table_name = table_name
        self.column_name = column_name
        location = f"{table_name}.{column_name}" if column_name else table_name
        super().__init__(f"{location}: {message}")


class RowShapeMismatchError(ConversionError):
    """Raised when a row's value count disagrees with the schema."""
    def __init__(self, table_name: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            table_name,
            None,
            f"row has {actual} value(s), schema has {expected} column(s)",
        )


class DuplicateEntryError(MsiSchemaError):
    """Raised when an added entry has the same key as one already held."""
    def __init__(self, table_name: str, key: Tuple):
        self.table_name = table_name
        self.key = tuple(key)
        super().__init__(
            f"{table_name}: an entry with key {self.key!r} is already present"
        )


class NoGeneratedIdentifierError(MsiSchemaError):
    """Raised when identifiers are requested for a table that does not generate them."""
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"{table_name}: primary identifier is not generated")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SchemaViolation",
    "MsiSchemaError",
    "UnknownCategoryError",
    "AmbiguousOrUnsupportedTypeError",
    "SchemaError",
    "DefinitionError",
    "ConversionError",
    "RowShapeMismatchError",
    "DuplicateEntryError",
    "NoGeneratedIdentifierError",
]
