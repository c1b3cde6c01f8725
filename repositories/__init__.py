# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Catalog access and reverse-engineering
# PURPOSE: Read catalog rows and rebuild structured schema definitions
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Provides read-only catalog access and the reverse-engineers built on it.
All repositories take a caller-supplied connection (Connection protocol).

Usage:
    from repositories import IndexRepository, ForeignKeyRepository

    with get_connection() as conn:
        indexes = IndexRepository(conn).indexes("users")
        fks = ForeignKeyRepository(conn).foreign_keys("orders")
"""

from .catalog_repo import CatalogRepository
from .index_repo import IndexRepository
from .foreign_key_repo import ForeignKeyRepository
from .enum_repo import EnumRepository, group_enum_rows

__all__ = [
    "CatalogRepository",
    "IndexRepository",
    "ForeignKeyRepository",
    "EnumRepository",
    "group_enum_rows",
]
