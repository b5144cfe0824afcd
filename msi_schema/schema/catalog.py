# ============================================================================
# CATEGORY CATALOG
# ============================================================================
# STATUS: Core - Storage category table
# PURPOSE: Known MSI column categories with shapes, widths and defaults
# CREATED: 18 OCT 2026
# EXPORTS: Category, CategoryCatalog, default_catalog
# DEPENDENCIES: pydantic
# ============================================================================
"""
Category Catalog

A category is the storage classification of an installer-table column
(Identifier, Integer, Filename, Version, Text, Binary, ...). Each entry
declares which value shapes it accepts, whether its width is fixed, and
whether columns of that category are nullable by default.

The catalog is an explicitly constructed, immutable value. The compiler
receives it as an argument; nothing reads a hidden global. Tests build
smaller catalogs to exercise inference edge cases.

Only categories marked `inferable` take part in automatic inference.
Every other category must be named explicitly on the field.
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Iterator, List, Optional

from pydantic import BaseModel

from msi_schema.config import CompilerDefaults, get_defaults
from msi_schema.contracts import ShapeKind, ValueKind, ValueShape
from msi_schema.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.CATALOG)

# Key columns of this category that are not foreign keys identify the row
PRIMARY_IDENTIFIER_CATEGORY = "Identifier"

INTEGER_SHAPES = frozenset({ShapeKind.SIGNED_INT, ShapeKind.UNSIGNED_INT})
TEXT_SHAPES = frozenset({ShapeKind.TEXT})
BINARY_SHAPES = frozenset({ShapeKind.BINARY})


class Category(BaseModel):
    """
    One storage category.

    fixed_width is in bits for integer categories. Binary streams carry a
    fixed width of 0 (stored out of row, no declared length). Variable-width
    categories use default_width as their conventional maximum.
    """
    name: str
    accepted_shapes: FrozenSet[ShapeKind]
    value_kind: ValueKind
    fixed_width: Optional[int] = None
    default_width: Optional[int] = None
    nullable_default: bool = False
    inferable: bool = False

    model_config = {"frozen": True}

    @property
    def is_fixed_width(self) -> bool:
        return self.fixed_width is not None

    def accepts(self, shape: ValueShape) -> bool:
        """Check shape kind and, for integer shapes, width agreement."""
        if shape.kind not in self.accepted_shapes:
            return False
        if shape.kind.is_integer() and self.is_fixed_width:
            return self.fixed_width == shape.width
        return True

    def type_code(self, width: int, nullable: bool, localizable: bool = False) -> str:
        """
        MSI column type string, e.g. 's72', 'L255', 'i2', 'I4', 'v0'.

        Uppercase letters mark nullable columns; 'l' marks localizable
        strings. Integer widths are reported in bytes.
        """
        if self.value_kind == ValueKind.INTEGER:
            code, size = "i", width // 8
        elif self.value_kind == ValueKind.STREAM:
            code, size = "v", 0
        else:
            code, size = ("l" if localizable else "s"), width
        if nullable:
            code = code.upper()
        return f"{code}{size}"


class CategoryCatalog:
    """
    Immutable lookup table of categories.

    Pure lookups, no side effects; safe to share across compilations.
    """

    def __init__(self, categories: Iterable[Category]):
        by_name = {}
        for category in categories:
            if category.name in by_name:
                raise ValueError(f"Duplicate category in catalog: {category.name}")
            by_name[category.name] = category
        self._categories = tuple(by_name.values())
        self._by_name = MappingProxyType(by_name)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> List[str]:
        return [c.name for c in self._categories]

    def by_name(self, name: str) -> Optional[Category]:
        """Resolve an explicit category override, None if unknown."""
        return self._by_name.get(name)

    def candidates(self, shape: ValueShape) -> List[Category]:
        """All inferable categories accepting the shape, in catalog order."""
        return [c for c in self._categories if c.inferable and c.accepts(shape)]

    def lookup(self, shape: ValueShape) -> Optional[Category]:
        """The unique default category for the shape, None if not unique."""
        matches = self.candidates(shape)
        if len(matches) == 1:
            return matches[0]
        return None


# ============================================================================
# DEFAULT MSI CATALOG
# ============================================================================

# Explicit-only string categories using the conventional text width
_TEXT_CATEGORY_NAMES = (
    "UpperCase",
    "LowerCase",
    "Filename",
    "WildCardFilename",
    "Path",
    "Paths",
    "AnyPath",
    "DefaultDir",
    "RegPath",
    "Formatted",
    "FormattedSDDLText",
    "Template",
    "Condition",
    "Version",
    "Language",
    "Cabinet",
    "Shortcut",
)

# Explicit-only string categories limited to identifier width
_IDENTIFIER_CATEGORY_NAMES = (
    "Identifier",
    "Property",
    "CustomSource",
)


def default_catalog(defaults: Optional[CompilerDefaults] = None) -> CategoryCatalog:
    """
    Build the MSI category catalog.

    Args:
        defaults: Width defaults (defaults to get_defaults())

    Returns:
        CategoryCatalog with integer, text, binary and the named
        string categories
    """
    defaults = defaults or get_defaults()

    categories = [
        Category(
            name="Integer",
            accepted_shapes=INTEGER_SHAPES,
            value_kind=ValueKind.INTEGER,
            fixed_width=16,
            inferable=True,
        ),
        Category(
            name="DoubleInteger",
            accepted_shapes=INTEGER_SHAPES,
            value_kind=ValueKind.INTEGER,
            fixed_width=32,
            inferable=True,
        ),
        Category(
            name="Text",
            accepted_shapes=TEXT_SHAPES,
            value_kind=ValueKind.STRING,
            default_width=defaults.default_text_width,
            inferable=True,
        ),
        Category(
            name="Binary",
            accepted_shapes=BINARY_SHAPES,
            value_kind=ValueKind.STREAM,
            fixed_width=0,
            inferable=True,
        ),
        Category(
            name="GUID",
            accepted_shapes=TEXT_SHAPES,
            value_kind=ValueKind.STRING,
            default_width=defaults.guid_width,
        ),
    ]
    categories.extend(
        Category(
            name=name,
            accepted_shapes=TEXT_SHAPES,
            value_kind=ValueKind.STRING,
            default_width=defaults.identifier_width,
        )
        for name in _IDENTIFIER_CATEGORY_NAMES
    )
    categories.extend(
        Category(
            name=name,
            accepted_shapes=TEXT_SHAPES,
            value_kind=ValueKind.STRING,
            default_width=defaults.default_text_width,
        )
        for name in _TEXT_CATEGORY_NAMES
    )
    catalog = CategoryCatalog(categories)
    logger.debug(
        f"Built default catalog with {len(categories)} categories "
        f"(text={defaults.default_text_width}, identifier={defaults.identifier_width})"
    )
    return catalog


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PRIMARY_IDENTIFIER_CATEGORY",
    "Category",
    "CategoryCatalog",
    "default_catalog",
]
