# ============================================================================
# ENUM REPOSITORY
# ============================================================================
# STATUS: Repository - Enum type reverse-engineering
# PURPOSE: Fold flat pg_enum rows into ordered EnumDescriptors
# CREATED: 19 OCT 2026
# ============================================================================
"""
Enum Repository

The catalog query returns one row per label, ordered by schema, type name
and sort order. A single pass groups consecutive rows of the same
(schema, name); the query's ORDER BY is trusted, rows are not re-sorted.
"""

from typing import Iterable, List

from core.contracts import Row
from core.models.enum_type import EnumDescriptor
from infrastructure.base_repository import BaseRepository
from repositories.catalog_repo import CatalogRepository


def group_enum_rows(rows: Iterable[Row]) -> List[EnumDescriptor]:
    """
    Group (schema, name, label, sort_order) rows into enum types.

    >>> group_enum_rows([("public", "size", "s", 1), ("public", "size", "m", 2)])[0].labels
    ['s', 'm']
    """
    groups: List[list] = []
    for schema, name, label, _sort_order in rows:
        last = groups[-1] if groups else None
        if last and last[0] == schema and last[1] == name:
            last[2].append(label)
        else:
            groups.append([schema, name, [label]])
    return [EnumDescriptor(schema=schema, name=name, labels=labels) for schema, name, labels in groups]


class EnumRepository(BaseRepository):
    """
    Reverse-engineers enum types across all schemas.

    Usage:
        for enum in EnumRepository(conn).enums():
            print(enum.qualified_name, enum.labels)
    """

    def __init__(self, connection):
        super().__init__(connection)
        self.catalog = CatalogRepository(connection)

    def enums(self) -> List[EnumDescriptor]:
        """Every enum type, ordered by schema then name."""
        descriptors = group_enum_rows(self.catalog.enum_rows())
        self._log_operation(True, "enums", "*", {"count": len(descriptors)})
        return descriptors


__all__ = ["EnumRepository", "group_enum_rows"]
