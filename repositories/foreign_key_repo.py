# ============================================================================
# FOREIGN KEY REPOSITORY
# ============================================================================
# STATUS: Repository - Foreign key reverse-engineering
# PURPOSE: Rebuild ForeignKeyDescriptors from pg_get_constraintdef() text
# CREATED: 19 OCT 2026
# ============================================================================
"""
Foreign Key Repository

Both directions share one parser:
- foreign_keys(table): constraints defined on table
- reverse_foreign_keys(table): constraints on other tables referencing table

Rows whose definition is not a FOREIGN KEY definition are skipped; this
is a filter, not an error.
"""

from typing import List

from core.logging import log_context
from core.models.foreign_key import ForeignKeyDescriptor
from core.schema.parsers import parse_foreign_key_definition
from infrastructure.base_repository import BaseRepository
from repositories.catalog_repo import CatalogRepository


class ForeignKeyRepository(BaseRepository):
    """
    Reverse-engineers foreign key constraints.

    Usage:
        repo = ForeignKeyRepository(conn)
        for fk in repo.foreign_keys("orders"):
            print(fk.column_names, "->", fk.to_table, fk.references_column_names)
    """

    def __init__(self, connection):
        super().__init__(connection)
        self.catalog = CatalogRepository(connection)

    def foreign_keys(self, table: str) -> List[ForeignKeyDescriptor]:
        """Foreign keys declared on table."""
        with log_context(table=table):
            return self.load_foreign_keys(self.catalog.foreign_key_rows(table))

    def reverse_foreign_keys(self, table: str) -> List[ForeignKeyDescriptor]:
        """Foreign keys of other tables that reference table."""
        with log_context(table=table):
            return self.load_foreign_keys(self.catalog.reverse_foreign_key_rows(table))

    def load_foreign_keys(self, rows) -> List[ForeignKeyDescriptor]:
        """
        Parse (conname, constraintdef, from_table) rows.

        Args:
            rows: Catalog rows in query order

        Returns:
            Descriptors for rows matching the FOREIGN KEY grammar
        """
        foreign_keys = []
        for name, definition, from_table in rows:
            parsed = parse_foreign_key_definition(definition)
            if parsed is None:
                self.logger.debug(f"Skipping non-foreign-key constraint {name}: {definition}")
                continue

            foreign_keys.append(ForeignKeyDescriptor(
                name=name,
                from_table=from_table,
                to_table=parsed.to_table,
                column_names=parsed.column_names,
                references_column_names=parsed.references_column_names,
                on_update=parsed.on_update,
                on_delete=parsed.on_delete,
                deferrable=parsed.deferrable,
            ))
        return foreign_keys


__all__ = ["ForeignKeyRepository"]
