# ============================================================================
# ROW VALUES
# ============================================================================
# STATUS: Core - Generic database value
# PURPOSE: Tagged Value union and Row alias consumed by the database engine
# CREATED: 18 OCT 2026
# ============================================================================
"""
Row Values

A Row is an ordered list of Values, one per table column. A Value is a
tagged union: null, integer, string or binary stream.
"""

from dataclasses import dataclass
from typing import List, Union

from msi_schema.contracts import ValueKind


@dataclass(frozen=True)
class Value:
    """Generic column value with a null marker."""
    kind: ValueKind
    data: Union[None, int, str, bytes] = None

    def __post_init__(self):
        expected = {
            ValueKind.NULL: type(None),
            ValueKind.INTEGER: int,
            ValueKind.STRING: str,
            ValueKind.STREAM: bytes,
        }[self.kind]
        if not isinstance(self.data, expected) or (
            self.kind == ValueKind.INTEGER and isinstance(self.data, bool)
        ):
            raise TypeError(
                f"{self.kind.value} value cannot hold {type(self.data).__name__}"
            )

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def integer(cls, data: int) -> "Value":
        return cls(ValueKind.INTEGER, data)

    @classmethod
    def string(cls, data: str) -> "Value":
        return cls(ValueKind.STRING, data)

    @classmethod
    def stream(cls, data: bytes) -> "Value":
        return cls(ValueKind.STREAM, bytes(data))

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL


Row = List[Value]


__all__ = ["Value", "Row"]
