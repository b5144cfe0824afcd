# ============================================================================
# PYDANTIC DAO READER
# ============================================================================
# STATUS: Core - Model front end
# PURPOSE: Turn Pydantic DAO models into DaoDefinitions
# CREATED: 18 OCT 2026
# EXPORTS: MsiColumn, IntegerWidth, I16, U16, I32, U32, Identifier, GeneratedIdentifier,
#          definition_from_model
# DEPENDENCIES: pydantic, annotated_types
# ============================================================================
"""
Pydantic DAO Reader

Pydantic models are the single source of truth for DAO types.

Model Metadata Convention:
    Models define table metadata via ClassVar attributes:
    - __msi_table__: Table name (defaults to the class name)
    - __msi_primary_key__: Key field(s) - string or list
    - __msi_foreign_keys__: Dict of {field: "ReferencedTable"}

    Fields carry per-column metadata in Annotated[...]:
    - MsiColumn(category=..., column_name=..., localizable=..., generated=...)
    - IntegerWidth(bits, signed) - use the I16/U16/I32/U32 aliases
    - Field(max_length=N) / MaxLen(N) declares a string column width
    - Optional[...] marks the column nullable

Usage:
    class Property(BaseModel):
        __msi_table__: ClassVar[str] = "Property"
        __msi_primary_key__: ClassVar[List[str]] = ["property"]

        property: Annotated[str, MsiColumn(category="Identifier")] = Field(..., max_length=72)
        value: str = Field(..., max_length=255)

    definition = definition_from_model(Property)
"""

from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional, Tuple, Type, Union, get_args, get_origin

from annotated_types import Ge, Le, MaxLen
from pydantic import BaseModel

from msi_schema.config import CompilerDefaults, get_defaults
from msi_schema.contracts import ValueShape
from msi_schema.errors import DefinitionError
from msi_schema.schema.fields import DaoDefinition, FieldAttributes, FieldDefinition


# ============================================================================
# FIELD MARKERS
# ============================================================================

@dataclass(frozen=True)
class IntegerWidth:
    """Declares the storage width (bits) and signedness of an int field."""
    bits: int
    signed: bool = True


@dataclass(frozen=True)
class MsiColumn:
    """Per-field column overrides. Unset entries use category defaults."""
    category: Optional[str] = None
    column_name: Optional[str] = None
    primary_key: Optional[bool] = None
    nullable: Optional[bool] = None
    localizable: Optional[bool] = None
    width: Optional[int] = None
    foreign_key: Optional[str] = None
    generated: Optional[bool] = None


I16 = Annotated[int, IntegerWidth(16), Ge(-0x8000), Le(0x7FFF)]
U16 = Annotated[int, IntegerWidth(16, signed=False), Ge(0), Le(0xFFFF)]
I32 = Annotated[int, IntegerWidth(32), Ge(-0x80000000), Le(0x7FFFFFFF)]
U32 = Annotated[int, IntegerWidth(32, signed=False), Ge(0), Le(0xFFFFFFFF)]

Identifier = Annotated[str, MsiColumn(category="Identifier")]
GeneratedIdentifier = Annotated[str, MsiColumn(category="Identifier", generated=True)]


# ============================================================================
# METADATA EXTRACTION
# ============================================================================

def get_model_metadata(model: Type[BaseModel]) -> Dict[str, Any]:
    """
    Extract table metadata from a Pydantic model.

    Returns:
        Dict with table, primary_key, foreign_keys
    """
    metadata = {
        "table": getattr(model, "__msi_table__", None) or model.__name__,
        "primary_key": getattr(model, "__msi_primary_key__", []),
        "foreign_keys": getattr(model, "__msi_foreign_keys__", {}),
    }

    # Normalize primary_key to list
    if isinstance(metadata["primary_key"], str):
        metadata["primary_key"] = [metadata["primary_key"]]

    return metadata


def _unwrap(annotation: Any) -> Tuple[Any, bool, List[Any]]:
    """
    Strip Optional and nested Annotated layers.

    Returns:
        (bare type, is_optional, collected Annotated metadata)
    """
    optional = False
    metadata: List[Any] = []

    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            args = get_args(annotation)
            annotation = args[0]
            metadata.extend(args[1:])
            continue
        if origin is Union or (origin is not None and type(None) in get_args(annotation)):
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) != len(get_args(annotation)):
                optional = True
            if len(args) == 1:
                annotation = args[0]
                continue
        break

    return annotation, optional, metadata


def shape_from_annotation(
    annotation: Any,
    metadata: List[Any],
    defaults: Optional[CompilerDefaults] = None,
) -> ValueShape:
    """
    Derive the ValueShape of a bare annotation.

    bool is never an integer shape; plain int uses the configured width.
    """
    defaults = defaults or get_defaults()

    widths = [m for m in metadata if isinstance(m, IntegerWidth)]

    if isinstance(annotation, type):
        if issubclass(annotation, bool):
            return ValueShape.other(annotation.__name__)
        if issubclass(annotation, int):
            if widths:
                marker = widths[-1]
                if marker.signed:
                    return ValueShape.signed_int(marker.bits)
                return ValueShape.unsigned_int(marker.bits)
            return ValueShape.signed_int(defaults.plain_int_width)
        if issubclass(annotation, str):
            return ValueShape.text()
        if issubclass(annotation, (bytes, bytearray)):
            return ValueShape.binary()
        return ValueShape.other(annotation.__name__)

    return ValueShape.other(str(annotation))


def _field_attributes(
    field_name: str,
    optional: bool,
    metadata: List[Any],
    table_meta: Dict[str, Any],
) -> FieldAttributes:
    markers = [m for m in metadata if isinstance(m, MsiColumn)]
    marker = markers[-1] if markers else MsiColumn()

    width = marker.width
    if width is None:
        for item in metadata:
            if isinstance(item, MaxLen):
                width = item.max_length

    is_key = marker.primary_key
    if field_name in table_meta["primary_key"]:
        is_key = True

    nullable = marker.nullable
    if nullable is None and optional:
        nullable = True

    return FieldAttributes(
        explicit_category=marker.category,
        nullable=nullable,
        is_key=is_key,
        is_localizable=marker.localizable,
        width=width,
        column_name=marker.column_name,
        foreign_key=marker.foreign_key or table_meta["foreign_keys"].get(field_name),
        generated=marker.generated,
    )


def definition_from_model(
    model: Type[BaseModel],
    defaults: Optional[CompilerDefaults] = None,
) -> DaoDefinition:
    """
    Read a Pydantic model into a DaoDefinition.

    Field order is the model's declaration order.

    Raises:
        DefinitionError: model is not a Pydantic model, or table metadata
            names fields the model does not declare
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise DefinitionError(f"{model!r} is not a Pydantic model")

    meta = get_model_metadata(model)
    declared = set(model.model_fields)

    unknown = [n for n in meta["primary_key"] if n not in declared]
    unknown += [n for n in meta["foreign_keys"] if n not in declared]
    if unknown:
        raise DefinitionError(
            f"table metadata names undeclared field(s): {', '.join(unknown)}",
            source=model.__name__,
        )

    fields = []
    for field_name, field_info in model.model_fields.items():
        bare, optional, nested = _unwrap(field_info.annotation)
        metadata = list(field_info.metadata) + nested
        fields.append(FieldDefinition(
            name=field_name,
            shape=shape_from_annotation(bare, metadata, defaults),
            attributes=_field_attributes(field_name, optional, metadata, meta),
        ))

    return DaoDefinition(table_name=meta["table"], fields=tuple(fields))


__all__ = [
    "IntegerWidth",
    "MsiColumn",
    "I16",
    "U16",
    "I32",
    "U32",
    "Identifier",
    "GeneratedIdentifier",
    "get_model_metadata",
    "shape_from_annotation",
    "definition_from_model",
]
