# ============================================================================
# DESCRIPTOR & CONVERSION EMITTER
# ============================================================================
# STATUS: Core - Conversion generation
# PURPOSE: Generate to_row / from_row for a validated TableSchema
# CREATED: 18 OCT 2026
# EXPORTS: ConversionPair, DescriptorEmitter, MappingBinding, ModelBinding
# DEPENDENCIES: pydantic
# ============================================================================
"""
Descriptor & Conversion Emitter

From a validated TableSchema, builds one encoder and one decoder per
column and closes over them to produce:

    to_row(dao) -> Row
        Column order. Non-nullable columns always produce a value;
        None in a nullable column becomes the null marker.

    from_row(row) -> dao
        Wrong value count fails first (RowShapeMismatchError). Every value
        is checked against its column's category and width; any mismatch
        is a ConversionError naming the column. No defaults are invented.

How DAOs are read and rebuilt is delegated to a binding:
    MappingBinding - DAOs are plain dicts; null columns are left out
    ModelBinding   - DAOs are instances of a Pydantic model
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Sequence, Type

from pydantic import BaseModel, ValidationError

from msi_schema.contracts import ValueKind
from msi_schema.errors import ConversionError, RowShapeMismatchError
from msi_schema.logging import ComponentType, get_logger
from msi_schema.schema.fields import FieldSpec
from msi_schema.schema.table import TableSchema
from msi_schema.schema.values import Row, Value

logger = get_logger(__name__, ComponentType.EMITTER)

_MISSING = object()


# ============================================================================
# DAO BINDINGS
# ============================================================================

class MappingBinding:
    """
    DAOs are dicts keyed by field name.

    An absent key and an explicit None are the same null column. Rebuilt
    dicts leave null columns out, so a DAO that omits its empty nullable
    keys survives to_row / from_row unchanged.
    """

    def get(self, dao: Any, field_name: str) -> Any:
        return dao.get(field_name)

    def build(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return {name: value for name, value in values.items() if value is not None}


class ModelBinding:
    """DAOs are instances of a Pydantic model."""

    def __init__(self, model: Type[BaseModel]):
        self.model = model

    def get(self, dao: Any, field_name: str) -> Any:
        value = getattr(dao, field_name, _MISSING)
        if value is _MISSING:
            raise AttributeError(field_name)
        return value

    def build(self, values: Dict[str, Any]) -> BaseModel:
        return self.model.model_validate(values)


# ============================================================================
# CONVERSION PAIR
# ============================================================================

@dataclass(frozen=True)
class ConversionPair:
    """Generated conversions for one table."""
    to_row: Callable[[Any], Row]
    from_row: Callable[[Sequence[Value]], Any]


# ============================================================================
# EMITTER
# ============================================================================

class DescriptorEmitter:
    """Generate conversions for one validated TableSchema."""

    def __init__(self, schema: TableSchema, binding=None):
        self.schema = schema
        self.binding = binding or MappingBinding()

    # ------------------------------------------------------------------
    # Per-column encoders
    # ------------------------------------------------------------------

    def _fail(self, spec: FieldSpec, message: str) -> ConversionError:
        return ConversionError(self.schema.table_name, spec.column_name, message)

    def _check_range(self, spec: FieldSpec, value: int) -> None:
        low, high = spec.value_shape.value_range()
        if not low <= value <= high:
            raise self._fail(
                spec,
                f"{value} is outside {spec.value_shape.describe()} range [{low}, {high}]",
            )

    def make_encoder(self, spec: FieldSpec) -> Callable[[Any], Value]:
        kind = spec.category.value_kind

        def encode(value: Any) -> Value:
            if value is None:
                if spec.nullable:
                    return Value.null()
                raise self._fail(spec, "non-nullable column has no value")

            if isinstance(value, Enum):
                value = value.value

            if kind == ValueKind.INTEGER:
                if not isinstance(value, int) or isinstance(value, bool):
                    raise self._fail(spec, f"expected int, got {type(value).__name__}")
                self._check_range(spec, value)
                return Value.integer(int(value))

            if kind == ValueKind.STREAM:
                if not isinstance(value, (bytes, bytearray, memoryview)):
                    raise self._fail(spec, f"expected bytes, got {type(value).__name__}")
                return Value.stream(bytes(value))

            if not isinstance(value, str):
                raise self._fail(spec, f"expected str, got {type(value).__name__}")
            return Value.string(str(value))

        return encode

    def make_decoder(self, spec: FieldSpec) -> Callable[[Value], Any]:
        kind = spec.category.value_kind

        def decode(value: Value) -> Any:
            if not isinstance(value, Value):
                raise self._fail(spec, f"expected Value, got {type(value).__name__}")

            if value.is_null:
                if spec.nullable:
                    return None
                raise self._fail(spec, "null in non-nullable column")

            if value.kind != kind:
                raise self._fail(
                    spec,
                    f"{spec.category.name} column expects {kind.value} value, "
                    f"got {value.kind.value}",
                )

            if kind == ValueKind.INTEGER:
                self._check_range(spec, value.data)
            return value.data

        return decode

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def emit(self) -> ConversionPair:
        """Generate the to_row / from_row pair."""
        table_name = self.schema.table_name
        columns = self.schema.columns
        binding = self.binding
        encoders = [(c, self.make_encoder(c)) for c in columns]
        decoders = [(c, self.make_decoder(c)) for c in columns]
        column_names = {c.field_name: c.column_name for c in columns}

        def to_row(dao: Any) -> Row:
            row: List[Value] = []
            for spec, encode in encoders:
                try:
                    value = binding.get(dao, spec.field_name)
                except AttributeError as e:
                    raise ConversionError(
                        table_name, spec.column_name, f"DAO has no field '{spec.field_name}'"
                    ) from e
                row.append(encode(value))
            return row

        def from_row(row: Sequence[Value]) -> Any:
            if len(row) != len(decoders):
                raise RowShapeMismatchError(table_name, len(decoders), len(row))
            values = {}
            for (spec, decode), value in zip(decoders, row):
                values[spec.field_name] = decode(value)
            try:
                return binding.build(values)
            except ValidationError as e:
                first = e.errors()[0]
                field_name = str(first["loc"][0]) if first.get("loc") else None
                raise ConversionError(
                    table_name,
                    column_names.get(field_name, field_name),
                    f"DAO rejected row: {first.get('msg')}",
                ) from e

        logger.debug(f"Emitted conversions for {len(columns)} column(s)")
        return ConversionPair(to_row=to_row, from_row=from_row)


__all__ = [
    "MappingBinding",
    "ModelBinding",
    "ConversionPair",
    "DescriptorEmitter",
]
