# ============================================================================
# INDEX REPOSITORY
# ============================================================================
# STATUS: Repository - Index reverse-engineering
# PURPOSE: Rebuild IndexDescriptors from pg_index rows and index definitions
# CREATED: 19 OCT 2026
# ============================================================================
"""
Index Repository

Reads a table's indexes from the catalog and recovers what pg_index does
not expose directly:
- case-insensitive columns hidden behind lower(<column>) expressions
- DESC sort order, only visible in pg_get_indexdef() text
- non-default operator classes

Algorithm per index row:
    1. Map key attribute numbers to names (0 = expression slot)
    2. If the expression is only lower(<character column>) terms, put
       those columns into the expression slots and mark the index
       case-insensitive; otherwise keep the expression opaque
    3. Pair operator classes with columns, dropping default classes
    4. Scan the definition text for "<column> DESC"
    5. Report "btree" as no explicit access method
"""

from typing import Dict, List, Optional, Tuple

from core.config.defaults import DialectCapabilities
from core.contracts import Row, SortOrder
from core.errors import CorruptIndexCatalogRow
from core.logging import log_context
from core.models.index import IndexDescriptor
from core.schema.parsers import case_insensitive_columns, descending_columns
from infrastructure.base_repository import BaseRepository
from repositories.catalog_repo import CatalogRepository


def _vector(text) -> List[int]:
    """int2vector / oidvector rendered as text ("1 0 3") to ints."""
    if text is None:
        return []
    if isinstance(text, (list, tuple)):
        return [int(v) for v in text]
    return [int(v) for v in str(text).split()]


class IndexRepository(BaseRepository):
    """
    Reverse-engineers a table's indexes.

    Usage:
        repo = IndexRepository(conn)
        for index in repo.indexes("users"):
            print(index.name, index.columns, index.case_sensitive)
    """

    def __init__(self, connection, capabilities: Optional[DialectCapabilities] = None):
        super().__init__(connection)
        self.capabilities = capabilities or DialectCapabilities()
        self.catalog = CatalogRepository(connection)

    def indexes(self, table: str) -> List[IndexDescriptor]:
        """
        Non-primary indexes of a table, ordered by index name.

        Raises:
            CorruptIndexCatalogRow: an index with no key columns and no expression
            psycopg.Error: any query failure, unchanged
        """
        with log_context(table=table):
            rows = self.catalog.index_rows(table)

            # One attribute lookup per owning relation
            attributes: Dict[int, Tuple[Dict[int, str], Dict[str, str]]] = {}
            descriptors = []
            for row in rows:
                relation_oid = row[4]
                if relation_oid not in attributes:
                    attributes[relation_oid] = self._attribute_lookup(relation_oid)
                columns, types = attributes[relation_oid]
                descriptors.append(self._descriptor(table, row, columns, types))

        self._log_operation(True, "indexes", table, {"count": len(descriptors)})
        return descriptors

    def _attribute_lookup(self, relation_oid: int) -> Tuple[Dict[int, str], Dict[str, str]]:
        """attnum -> attname and attname -> typname for one relation."""
        columns: Dict[int, str] = {}
        types: Dict[str, str] = {}
        for number, name, type_name in self.catalog.attribute_rows(relation_oid):
            columns[int(number)] = name
            types[name] = type_name
        return columns, types

    def _descriptor(
        self,
        table: str,
        row: Row,
        columns: Dict[int, str],
        types: Dict[str, str],
    ) -> IndexDescriptor:
        (index_name, is_unique, indkey, indexdef, _oid,
         kind, conditions, expression, indclass) = row

        with log_context(index=index_name):
            index_keys = _vector(indkey)
            opclasses = _vector(indclass)

            # Expression slots (key 0) have no attribute name
            slots: List[Optional[str]] = [columns.get(key) if key else None for key in index_keys]
            case_sensitive = True

            lowered = case_insensitive_columns(expression)
            if lowered and all(self.capabilities.is_character_type(types.get(c)) for c in lowered):
                case_sensitive = False
                pending = iter(lowered)
                slots = [next(pending, None) if key == 0 else name
                         for key, name in zip(index_keys, slots)]
            elif expression:
                self.logger.debug(f"Keeping opaque expression for {index_name}: {expression}")

            column_names = [name for name in slots if name is not None]
            if not column_names and not expression:
                self.logger.error(f"Index {index_name} has no key columns and no expression")
                raise CorruptIndexCatalogRow(index_name, table)

            operator_classes = self._operator_classes(slots, opclasses)
            orders = self._orders(column_names, indexdef)

            return IndexDescriptor(
                table=table,
                columns=column_names,
                name=index_name,
                unique=bool(is_unique),
                kind=None if kind.lower() == self.capabilities.default_index_method else kind,
                expression=expression,
                conditions=conditions,
                case_sensitive=case_sensitive,
                orders=orders,
                operator_classes=operator_classes,
            )

    def _operator_classes(self, slots: List[Optional[str]], opclasses: List[int]) -> Dict[str, str]:
        """Column -> operator class, for non-default classes only."""
        names = dict(self.catalog.operator_class_rows(sorted(set(opclasses))))
        result = {}
        for column, opclass in zip(slots, opclasses):
            opcname = names.get(opclass)
            if column is not None and opcname is not None:
                result[column] = opcname
        return result

    @staticmethod
    def _orders(column_names: List[str], indexdef: Optional[str]) -> Dict[str, SortOrder]:
        """Per-column order, recorded only when some column is DESC."""
        desc = descending_columns(indexdef)
        if not desc.intersection(column_names):
            return {}
        return {
            column: SortOrder.DESC if column in desc else SortOrder.ASC
            for column in column_names
        }


__all__ = ["IndexRepository"]
