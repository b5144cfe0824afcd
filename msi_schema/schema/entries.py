# ============================================================================
# TABLE ENTRIES
# ============================================================================
# STATUS: Core - Per-table DAO container
# PURPOSE: Hold the DAOs of one compiled table, one entry per key
# CREATED: 18 OCT 2026
# EXPORTS: TableEntries, table_entries
# ============================================================================
"""
Table Entries

A TableEntries holds the DAOs destined for one installer table. Every
DAO is converted with the table's to_row on the way in, so a container
only ever holds entries the engine will accept, and an entry whose key
matches one already held is rejected with DuplicateEntryError.

Primary identifiers of added entries go into the `used` set. Share one
set across every table of a database (table_entries() does this) so that
generated identifiers never collide with hand-written ones.

Usage:
    tables = compile_standard_tables()
    entries = table_entries(tables)

    directories = entries["Directory"]
    directories.add(Directory(directory="TARGETDIR", default_dir="SourceDir"))
    generated = directories.generate_identifier()     # "DIRECTORY1"
"""

from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from msi_schema.errors import DuplicateEntryError, NoGeneratedIdentifierError
from msi_schema.logging import ComponentType, get_logger, log_context
from msi_schema.schema.compiler import CompiledTable
from msi_schema.schema.fields import FieldSpec
from msi_schema.schema.values import Row

logger = get_logger(__name__, ComponentType.ENTRIES)


class TableEntries:
    """Ordered entries of one compiled table."""

    def __init__(self, table: CompiledTable, used: Optional[Set[str]] = None):
        self.table = table
        self.used = used if used is not None else set()
        self.generator = table.identifier_generator(self.used)
        self._entries: List[Any] = []
        self._by_key: Dict[Tuple[Any, ...], Any] = {}

    def __repr__(self) -> str:
        return f"TableEntries({self.name!r}, entries={len(self._entries)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    @property
    def name(self) -> str:
        return self.table.table_name

    @property
    def entries(self) -> Tuple[Any, ...]:
        return tuple(self._entries)

    @property
    def columns(self) -> Tuple[FieldSpec, ...]:
        return self.table.schema.columns

    @property
    def primary_key_indices(self) -> List[int]:
        return self.table.schema.key_indices

    def get(self, *key: Any) -> Optional[Any]:
        """Entry with the given key values, None if absent."""
        return self._by_key.get(tuple(key))

    def add(self, dao: Any) -> Any:
        """
        Add one entry.

        Raises:
            ConversionError: DAO does not convert to a row of this table
            DuplicateEntryError: an entry with the same key is present
        """
        with log_context(table=self.name, operation="add_entry"):
            self.table.to_row(dao)
            key = self.table.key_of(dao)
            if key in self._by_key:
                raise DuplicateEntryError(self.name, key)

            self._entries.append(dao)
            self._by_key[key] = dao

            identifier = self.table.primary_identifier(dao)
            if identifier is not None:
                self.used.add(identifier)

            logger.debug(f"Added entry {key!r}")
            return dao

    def extend(self, daos) -> None:
        for dao in daos:
            self.add(dao)

    def generate_identifier(self) -> str:
        """
        Next unused primary identifier for this table.

        Raises:
            NoGeneratedIdentifierError: primary identifier is not generated
        """
        if self.generator is None:
            raise NoGeneratedIdentifierError(self.name)
        return self.generator.generate()

    def rows(self) -> List[Row]:
        """Every entry as a row, in insertion order."""
        return [self.table.to_row(dao) for dao in self._entries]


def table_entries(tables: Dict[str, CompiledTable]) -> Dict[str, TableEntries]:
    """
    Empty containers for compiled tables sharing one used-identifier set.

    Args:
        tables: Output of compile_all()

    Returns:
        Dict of table name -> TableEntries, in the same order
    """
    used: Set[str] = set()
    return {name: TableEntries(table, used) for name, table in tables.items()}


__all__ = ["TableEntries", "table_entries"]
