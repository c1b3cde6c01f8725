# ============================================================================
# SCHEMA INSPECTOR SERVICE
# ============================================================================
# STATUS: Service - Schema reverse-engineering facade
# PURPOSE: One entry point over the catalog and reverse-engineering repositories
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Inspector Service

Collaborator-facing facade for schema dumpers and migration tools. Every
call re-reads the catalog; nothing is cached between calls.

Usage:
    inspector = SchemaInspector(conn)
    for index in inspector.indexes("users"):
        ...
    options = inspector.dump_column_options("users")
    # {"created_at": {"default": {"expr": "now()"}, "null": False}}
"""

from typing import Any, Dict, List, Mapping, Optional

from core.config.defaults import DialectCapabilities
from core.contracts import Connection
from core.logging import ComponentType, get_logger
from core.models.column import ColumnInfo
from core.models.enum_type import EnumDescriptor, ViewDescriptor
from core.models.foreign_key import ForeignKeyDescriptor
from core.models.index import IndexDescriptor
from repositories.catalog_repo import CatalogRepository
from repositories.enum_repo import EnumRepository
from repositories.foreign_key_repo import ForeignKeyRepository
from repositories.index_repo import IndexRepository

logger = get_logger(__name__, ComponentType.SERVICE)


class SchemaInspector:
    """
    Read-only view of a database schema.

    Args:
        connection: Object implementing the Connection protocol
        capabilities: Target dialect capabilities (default: PostgreSQL)
    """

    def __init__(self, connection: Connection, capabilities: Optional[DialectCapabilities] = None):
        self.connection = connection
        self.capabilities = capabilities or DialectCapabilities()
        self.catalog = CatalogRepository(connection)
        self.index_repo = IndexRepository(connection, self.capabilities)
        self.foreign_key_repo = ForeignKeyRepository(connection)
        self.enum_repo = EnumRepository(connection)

    def indexes(self, table: str) -> List[IndexDescriptor]:
        return self.index_repo.indexes(table)

    def foreign_keys(self, table: str) -> List[ForeignKeyDescriptor]:
        return self.foreign_key_repo.foreign_keys(table)

    def reverse_foreign_keys(self, table: str) -> List[ForeignKeyDescriptor]:
        return self.foreign_key_repo.reverse_foreign_keys(table)

    def enums(self) -> List[EnumDescriptor]:
        return self.enum_repo.enums()

    def views(self) -> List[str]:
        """View names on the search path."""
        return self.catalog.view_names()

    def view_definition(self, view: str) -> Optional[str]:
        return self.catalog.view_definition(view)

    def view_descriptors(self) -> List[ViewDescriptor]:
        """Every view with its SELECT text."""
        descriptors = []
        for name in self.views():
            definition = self.view_definition(name)
            if definition is None:
                logger.warning(f"View {name} disappeared while reading definitions")
                continue
            descriptors.append(ViewDescriptor(name=name, definition=definition))
        return descriptors

    def columns(self, table: str) -> List[ColumnInfo]:
        return self.catalog.columns(table)

    def default_expressions(self, table: str) -> Dict[str, str]:
        """Column -> default expression, for expression defaults only."""
        return {
            column.name: column.default_function
            for column in self.columns(table)
            if column.default_function is not None
        }

    def dump_column_options(
        self,
        table: str,
        column_options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> Dict[str, Dict[str, Any]]:
        """
        Column options for a schema dump, with expression defaults merged in.

        A column whose default is an expression gets
        {"default": {"expr": <text>}} in place of any literal default;
        its other options (from column_options) are kept.

        Args:
            table: Table name, optionally schema-qualified
            column_options: Existing per-column options from the caller's dumper

        Returns:
            Column name -> options, for every column of the table
        """
        column_options = column_options or {}
        dumped: Dict[str, Dict[str, Any]] = {}
        for column in self.columns(table):
            options = dict(column_options.get(column.name, {}))
            expression_default = column.default_options()
            if expression_default:
                options.pop("default", None)
                options = {**expression_default, **options}
            if not column.null:
                options.setdefault("null", False)
            dumped[column.name] = options
        return dumped


__all__ = ["SchemaInspector"]
