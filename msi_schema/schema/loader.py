# ============================================================================
# DECLARATIVE DEFINITION LOADER
# ============================================================================
# STATUS: Core - YAML front end
# PURPOSE: Read DaoDefinitions from a YAML document
# CREATED: 18 OCT 2026
# EXPORTS: load_definitions, definitions_from_mapping
# DEPENDENCIES: pyyaml
# ============================================================================
"""
Declarative Definition Loader

Document layout:

    tables:
      - name: Property
        fields:
          - {name: property, type: text, category: Identifier, width: 72, key: true}
          - {name: value, type: text, width: 255, nullable: true}

Field keys:
    name (required), type (required), category, width, key, nullable,
    localizable, column, foreign_key, generated

Type names map to value shapes: i16, u16, i32, u32, text, binary.
Any other type name becomes Other(name); no category accepts it, so
compiling that table reports it.

DAOs for loaded definitions are plain dicts keyed by field name.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import ValidationError

from msi_schema.contracts import ValueShape
from msi_schema.errors import DefinitionError
from msi_schema.logging import ComponentType, get_logger
from msi_schema.schema.fields import DaoDefinition, FieldAttributes, FieldDefinition

logger = get_logger(__name__, ComponentType.LOADER)

_SHAPES = {
    "i16": lambda: ValueShape.signed_int(16),
    "u16": lambda: ValueShape.unsigned_int(16),
    "i32": lambda: ValueShape.signed_int(32),
    "u32": lambda: ValueShape.unsigned_int(32),
    "text": ValueShape.text,
    "binary": ValueShape.binary,
}

# Document key -> FieldAttributes attribute
_ATTRIBUTE_KEYS = {
    "category": "explicit_category",
    "width": "width",
    "key": "is_key",
    "nullable": "nullable",
    "localizable": "is_localizable",
    "column": "column_name",
    "foreign_key": "foreign_key",
    "generated": "generated",
}

_FIELD_KEYS = {"name", "type"} | set(_ATTRIBUTE_KEYS)


def shape_from_type_name(type_name: str) -> ValueShape:
    factory = _SHAPES.get(type_name)
    if factory is None:
        return ValueShape.other(type_name)
    return factory()


def _field_from_mapping(table_name: str, index: int, data: Any, source: Optional[str]) -> FieldDefinition:
    where = f"table '{table_name}' field #{index}"
    if not isinstance(data, dict):
        raise DefinitionError(f"{where} must be a mapping", source=source)

    unknown = sorted(set(data) - _FIELD_KEYS)
    if unknown:
        raise DefinitionError(f"{where} has unknown key(s): {', '.join(unknown)}", source=source)

    name = data.get("name")
    type_name = data.get("type")
    if not isinstance(name, str) or not name:
        raise DefinitionError(f"{where} needs a 'name'", source=source)
    if not isinstance(type_name, str) or not type_name:
        raise DefinitionError(f"{where} ('{name}') needs a 'type'", source=source)

    attributes = {
        attr: data[key] for key, attr in _ATTRIBUTE_KEYS.items() if key in data
    }
    try:
        return FieldDefinition(
            name=name,
            shape=shape_from_type_name(type_name),
            attributes=FieldAttributes(**attributes),
        )
    except ValidationError as e:
        raise DefinitionError(f"{where} ('{name}') is invalid: {e}", source=source) from e


def definitions_from_mapping(data: Any, source: Optional[str] = None) -> List[DaoDefinition]:
    """
    Build DaoDefinitions from a parsed document.

    Args:
        data: Parsed document ({"tables": [...]})
        source: Document name for error messages

    Raises:
        DefinitionError: document does not follow the layout
    """
    if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
        raise DefinitionError("document must contain a 'tables' list", source=source)

    definitions = []
    for index, table in enumerate(data["tables"]):
        if not isinstance(table, dict):
            raise DefinitionError(f"table #{index} must be a mapping", source=source)
        table_name = table.get("name")
        if not isinstance(table_name, str) or not table_name:
            raise DefinitionError(f"table #{index} needs a 'name'", source=source)
        fields = table.get("fields") or []
        if not isinstance(fields, list):
            raise DefinitionError(f"table '{table_name}' 'fields' must be a list", source=source)

        definitions.append(DaoDefinition(
            table_name=table_name,
            fields=tuple(
                _field_from_mapping(table_name, i, f, source) for i, f in enumerate(fields)
            ),
        ))

    return definitions


def load_definitions(path: Union[str, Path]) -> List[DaoDefinition]:
    """
    Load DaoDefinitions from a YAML file.

    Raises:
        DefinitionError: file unreadable, not YAML, or malformed
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DefinitionError(f"cannot read definitions: {e}", source=str(path)) from e
    except yaml.YAMLError as e:
        raise DefinitionError(f"invalid YAML: {e}", source=str(path)) from e

    definitions = definitions_from_mapping(data, source=str(path))
    logger.info(f"Loaded {len(definitions)} table definition(s) from {path.name}")
    return definitions


__all__ = [
    "shape_from_type_name",
    "definitions_from_mapping",
    "load_definitions",
]
