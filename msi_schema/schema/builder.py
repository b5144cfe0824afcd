# ============================================================================
# FIELD DESCRIPTOR BUILDER
# ============================================================================
# STATUS: Core - Per-field normalization
# PURPOSE: Combine name, value shape and attributes into a FieldSpec
# CREATED: 18 OCT 2026
# ============================================================================
"""
Field Descriptor Builder

Resolution order for one field:
    1. explicit category -> catalog.by_name (UnknownCategoryError if absent)
    2. otherwise TypeResolver inference
    3. nullable: override, else category.nullable_default
    4. is_key / is_localizable: override, else False
    5. width: category fixed width, else declared width, else the
       category's conventional maximum

The builder does not judge the result; contradictions (declared width on
a fixed-width category, nullable keys, ...) are the validator's job so
that they are reported together.
"""

from msi_schema.errors import UnknownCategoryError
from msi_schema.logging import ComponentType, get_logger
from msi_schema.schema.catalog import CategoryCatalog
from msi_schema.schema.fields import FieldDefinition, FieldSpec, to_column_name
from msi_schema.schema.resolver import TypeResolver

logger = get_logger(__name__, ComponentType.BUILDER)


class FieldDescriptorBuilder:
    """Build FieldSpecs for one catalog."""

    def __init__(self, catalog: CategoryCatalog, resolver: TypeResolver = None):
        self.catalog = catalog
        self.resolver = resolver or TypeResolver(catalog)

    def build(self, table_name: str, definition: FieldDefinition, ordinal: int) -> FieldSpec:
        """
        Resolve one field into a FieldSpec.

        Args:
            table_name: Owning table (for error reporting)
            definition: Declared field
            ordinal: Declaration index

        Raises:
            UnknownCategoryError: explicit category not in catalog
            AmbiguousOrUnsupportedTypeError: inference failed
        """
        attrs = definition.attributes

        if attrs.explicit_category is not None:
            category = self.catalog.by_name(attrs.explicit_category)
            if category is None:
                raise UnknownCategoryError(table_name, definition.name, attrs.explicit_category)
        else:
            category = self.resolver.resolve(table_name, definition.name, definition.shape)

        nullable = attrs.nullable if attrs.nullable is not None else category.nullable_default

        if category.is_fixed_width:
            width = category.fixed_width
        elif attrs.width is not None:
            width = attrs.width
        else:
            width = category.default_width or 0

        spec = FieldSpec(
            field_name=definition.name,
            column_name=attrs.column_name or to_column_name(definition.name),
            value_shape=definition.shape,
            category=category,
            width=width,
            declared_width=attrs.width,
            nullable=nullable,
            is_key=bool(attrs.is_key),
            is_localizable=bool(attrs.is_localizable),
            foreign_key=attrs.foreign_key,
            generated=bool(attrs.generated),
            ordinal=ordinal,
        )
        logger.debug(
            f"Built column {spec.column_name} ({category.name}, width={width})"
        )
        return spec


__all__ = ["FieldDescriptorBuilder"]
