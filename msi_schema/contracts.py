# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and value-shape contract
# PURPOSE: Define shape kinds, value kinds, schema rules and ValueShape
# CREATED: 18 OCT 2026
# EXPORTS: ShapeKind, ValueKind, SchemaRule, ValueShape
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the MSI schema compiler.

These are the vocabulary shared by every stage of the pipeline:
- ShapeKind / ValueShape: what a DAO field's declared value type looks like
- ValueKind: the tag of a generic installer-database Value
- SchemaRule: the rule a schema violation broke
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


# ============================================================================
# ENUMS
# ============================================================================

class ShapeKind(str, Enum):
    """
    Structural kind of a field's declared value type.
    """
    SIGNED_INT = "signed_int"
    UNSIGNED_INT = "unsigned_int"
    TEXT = "text"
    BINARY = "binary"
    OTHER = "other"

    def is_integer(self) -> bool:
        """Check if this kind carries an integer width."""
        return self in (ShapeKind.SIGNED_INT, ShapeKind.UNSIGNED_INT)


class ValueKind(str, Enum):
    """
    Tag of a generic database Value.
    """
    NULL = "null"
    INTEGER = "integer"
    STRING = "string"
    STREAM = "stream"


class SchemaRule(str, Enum):
    """
    Schema rules checked by the validator.

    Each SchemaViolation names exactly one of these.
    """
    NO_FIELDS = "no_fields"
    DUPLICATE_FIELD_NAME = "duplicate_field_name"
    DUPLICATE_COLUMN_NAME = "duplicate_column_name"
    NO_KEY = "no_key"
    KEY_NOT_PREFIX = "key_not_prefix"
    NULLABLE_KEY = "nullable_key"
    FIXED_WIDTH_DECLARED = "fixed_width_declared"
    NON_POSITIVE_WIDTH = "non_positive_width"
    SHAPE_MISMATCH = "shape_mismatch"
    MULTIPLE_PRIMARY_IDENTIFIERS = "multiple_primary_identifiers"
    GENERATED_NOT_PRIMARY_IDENTIFIER = "generated_not_primary_identifier"
    DUPLICATE_TABLE = "duplicate_table"

    # Field or definition failures folded into an aggregated SchemaError
    UNKNOWN_CATEGORY = "unknown_category"
    UNRESOLVED_TYPE = "unresolved_type"
    INVALID_DEFINITION = "invalid_definition"


# ============================================================================
# VALUE SHAPE
# ============================================================================

class ValueShape(BaseModel):
    """
    Abstract description of a field's declared value type.

    One of SignedInt(width), UnsignedInt(width), TextLike, BinaryLike,
    Other(name). Integer widths are in bits.
    """
    kind: ShapeKind
    width: Optional[int] = None
    name: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_width(self) -> "ValueShape":
        if self.kind.is_integer():
            if self.width is None or self.width <= 0:
                raise ValueError(f"{self.kind.value} shape requires a positive width")
        elif self.width is not None:
            raise ValueError(f"{self.kind.value} shape does not carry a width")
        return self

    @classmethod
    def signed_int(cls, width: int) -> "ValueShape":
        return cls(kind=ShapeKind.SIGNED_INT, width=width)

    @classmethod
    def unsigned_int(cls, width: int) -> "ValueShape":
        return cls(kind=ShapeKind.UNSIGNED_INT, width=width)

    @classmethod
    def text(cls) -> "ValueShape":
        return cls(kind=ShapeKind.TEXT)

    @classmethod
    def binary(cls) -> "ValueShape":
        return cls(kind=ShapeKind.BINARY)

    @classmethod
    def other(cls, name: str) -> "ValueShape":
        return cls(kind=ShapeKind.OTHER, name=name)

    def value_range(self) -> Optional[tuple]:
        """Inclusive (low, high) range for integer shapes, else None."""
        if self.kind == ShapeKind.SIGNED_INT:
            half = 1 << (self.width - 1)
            return (-half, half - 1)
        if self.kind == ShapeKind.UNSIGNED_INT:
            return (0, (1 << self.width) - 1)
        return None

    def describe(self) -> str:
        """Short human-readable form (e.g. 'u16', 'text', 'Other(datetime)')."""
        if self.kind == ShapeKind.SIGNED_INT:
            return f"i{self.width}"
        if self.kind == ShapeKind.UNSIGNED_INT:
            return f"u{self.width}"
        if self.kind == ShapeKind.OTHER:
            return f"Other({self.name})"
        return self.kind.value


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ShapeKind",
    "ValueKind",
    "SchemaRule",
    "ValueShape",
]
