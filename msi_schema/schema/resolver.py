# ============================================================================
# TYPE RESOLVER
# ============================================================================
# STATUS: Core - Category inference
# PURPOSE: Infer a default category from a field's value shape
# CREATED: 18 OCT 2026
# ============================================================================
"""
Type Resolver

Matches a ValueShape structurally (kind, integer width) against the
inferable categories of a catalog. Exactly one candidate must match;
zero or several is an AmbiguousOrUnsupportedTypeError and the author has
to name a category explicitly.
"""

from msi_schema.contracts import ValueShape
from msi_schema.errors import AmbiguousOrUnsupportedTypeError
from msi_schema.logging import ComponentType, get_logger
from msi_schema.schema.catalog import Category, CategoryCatalog

logger = get_logger(__name__, ComponentType.RESOLVER)


class TypeResolver:
    """Infer categories from value shapes."""

    def __init__(self, catalog: CategoryCatalog):
        self.catalog = catalog

    def resolve(self, table_name: str, field_name: str, shape: ValueShape) -> Category:
        """
        Infer the default category for a field.

        Raises:
            AmbiguousOrUnsupportedTypeError: zero or several candidates
        """
        candidates = self.catalog.candidates(shape)
        if len(candidates) != 1:
            raise AmbiguousOrUnsupportedTypeError(
                table_name,
                field_name,
                shape.describe(),
                [c.name for c in candidates],
            )

        category = candidates[0]
        logger.debug(f"Inferred {category.name} for {shape.describe()}")
        return category


__all__ = ["TypeResolver"]
