# ============================================================================
# CATALOG REPOSITORY
# ============================================================================
# STATUS: Repository - Read-only system catalog queries
# PURPOSE: Fixed, parameterized queries against pg_catalog; raw rows out
# CREATED: 19 OCT 2026
# ============================================================================
"""
Catalog Repository

Issues read-only SQL against the PostgreSQL system catalogs and returns
raw rows (tuples in SELECT order). No parsing happens here beyond the
column lookup; the reverse-engineering repositories interpret the rows.

Schema resolution:
    "crm.users"  -> restricted to schema crm
    "users"      -> any schema on the connection's search path

Nothing is cached: every call re-reads the catalog.
"""

from typing import List, Optional, Sequence, Tuple

from psycopg import sql

from core.contracts import Row
from core.logging import log_context
from core.models.column import ColumnInfo
from core.schema.parsers import default_function, split_table_name
from infrastructure.base_repository import BaseRepository


# ============================================================================
# QUERIES
# ============================================================================

INDEX_SQL = sql.SQL("""
    SELECT i.relname, d.indisunique, CAST(d.indkey AS text), pg_get_indexdef(d.indexrelid), t.oid,
           m.amname, pg_get_expr(d.indpred, t.oid) AS conditions, pg_get_expr(d.indexprs, t.oid) AS expression,
           CAST(d.indclass AS text)
    FROM pg_class t
    INNER JOIN pg_index d ON t.oid = d.indrelid
    INNER JOIN pg_class i ON d.indexrelid = i.oid
    INNER JOIN pg_am m ON i.relam = m.oid
    WHERE i.relkind = 'i'
      AND d.indisprimary = 'f'
      AND t.relname = %s
      AND i.relnamespace IN (SELECT oid FROM pg_namespace WHERE nspname {namespace})
    ORDER BY i.relname
""")

ATTRIBUTE_SQL = sql.SQL("""
    SELECT a.attnum, a.attname, t.typname
    FROM pg_attribute a
    INNER JOIN pg_type t ON a.atttypid = t.oid
    WHERE a.attrelid = %s
""")

OPERATOR_CLASS_SQL = sql.SQL("""
    SELECT oid, opcname FROM pg_opclass
    WHERE (NOT opcdefault) AND oid = ANY (CAST(%s AS oid[]))
""")

FOREIGN_KEY_SQL = sql.SQL("""
    SELECT f.conname, pg_get_constraintdef(f.oid), t.relname
    FROM pg_class t, pg_constraint f
    WHERE f.conrelid = t.oid
      AND f.contype = 'f'
      AND t.relname = %s
      AND t.relnamespace IN (SELECT oid FROM pg_namespace WHERE nspname {namespace})
    ORDER BY f.conname
""")

REVERSE_FOREIGN_KEY_SQL = sql.SQL("""
    SELECT f.conname, pg_get_constraintdef(f.oid), t2.relname
    FROM pg_class t, pg_class t2, pg_constraint f
    WHERE f.confrelid = t.oid
      AND f.conrelid = t2.oid
      AND f.contype = 'f'
      AND t.relname = %s
      AND t.relnamespace IN (SELECT oid FROM pg_namespace WHERE nspname {namespace})
    ORDER BY t2.relname, f.conname
""")

ENUM_SQL = sql.SQL("""
    SELECT
      N.nspname AS schema_name,
      T.typname AS enum_name,
      E.enumlabel AS enum_label,
      E.enumsortorder AS enum_sort_order
    FROM pg_type T
    JOIN pg_enum E ON E.enumtypid = T.oid
    JOIN pg_namespace N ON N.oid = T.typnamespace
    ORDER BY 1, 2, 4
""")

VIEW_SQL = sql.SQL("""
    SELECT viewname
    FROM pg_views
    WHERE schemaname = ANY (current_schemas(false))
      AND viewname NOT LIKE %s
    ORDER BY viewname
""")

VIEW_DEFINITION_SQL = sql.SQL("""
    SELECT pg_get_viewdef(c.oid)
    FROM pg_class c
    WHERE c.relkind = 'v'
      AND c.relname = %s
      AND c.relnamespace IN (SELECT oid FROM pg_namespace WHERE nspname {namespace})
""")

COLUMN_SQL = sql.SQL("""
    SELECT a.attname, format_type(a.atttypid, a.atttypmod), t.typname,
           pg_get_expr(ad.adbin, ad.adrelid), a.attnotnull
    FROM pg_attribute a
    INNER JOIN pg_class c ON a.attrelid = c.oid
    INNER JOIN pg_type t ON a.atttypid = t.oid
    LEFT JOIN pg_attrdef ad ON ad.adrelid = a.attrelid AND ad.adnum = a.attnum
    WHERE c.relname = %s
      AND c.relnamespace IN (SELECT oid FROM pg_namespace WHERE nspname {namespace})
      AND a.attnum > 0
      AND NOT a.attisdropped
    ORDER BY a.attnum
""")


def namespace_filter(schema: Optional[str]) -> Tuple[sql.Composable, List[str]]:
    """Restrict to one schema, or to the schemas on the search path."""
    if schema:
        return sql.SQL("= %s"), [schema]
    return sql.SQL("= ANY (current_schemas(false))"), []


# ============================================================================
# REPOSITORY
# ============================================================================

class CatalogRepository(BaseRepository):
    """
    Read-only access to pg_catalog.

    Every method returns rows exactly as the database emitted them.
    """

    def _relation_query(self, template: sql.SQL, table: str) -> List[Row]:
        schema, name = split_table_name(table)
        namespace, params = namespace_filter(schema)
        with log_context(schema=schema, table=name):
            return self._query(template.format(namespace=namespace), [name, *params])

    def index_rows(self, table: str) -> List[Row]:
        """
        Non-primary indexes of a table, ordered by index name.

        Row: (name, unique, indkey, indexdef, table_oid, amname,
              conditions, expression, indclass)
        """
        with self._error_context("index lookup", table):
            return self._relation_query(INDEX_SQL, table)

    def attribute_rows(self, relation_oid: int) -> List[Row]:
        """Row: (attnum, attname, typname) for every attribute of a relation."""
        with self._error_context("attribute lookup", str(relation_oid)):
            return self._query(ATTRIBUTE_SQL, [relation_oid])

    def operator_class_rows(self, opclass_oids: Sequence[int]) -> List[Row]:
        """Row: (oid, opcname) for the non-default operator classes among the ids."""
        if not opclass_oids:
            return []
        with self._error_context("operator class lookup"):
            return self._query(OPERATOR_CLASS_SQL, [list(opclass_oids)])

    def foreign_key_rows(self, table: str) -> List[Row]:
        """Row: (conname, constraintdef, from_table) for FKs defined on table."""
        with self._error_context("foreign key lookup", table):
            return self._relation_query(FOREIGN_KEY_SQL, table)

    def reverse_foreign_key_rows(self, table: str) -> List[Row]:
        """Row: (conname, constraintdef, from_table) for FKs referencing table."""
        with self._error_context("reverse foreign key lookup", table):
            return self._relation_query(REVERSE_FOREIGN_KEY_SQL, table)

    def enum_rows(self) -> List[Row]:
        """Row: (schema, enum_name, label, sort_order), ordered by 1, 2, 4."""
        with self._error_context("enum lookup"):
            return self._query(ENUM_SQL)

    def view_names(self) -> List[str]:
        """Views in the search-path schemas, excluding pg_* views."""
        with self._error_context("view lookup"):
            return [row[0] for row in self._query(VIEW_SQL, ["pg\\_%"])]

    def view_definition(self, view: str) -> Optional[str]:
        """SELECT text of a view with the trailing semicolon removed."""
        with self._error_context("view definition lookup", view):
            rows = self._relation_query(VIEW_DEFINITION_SQL, view)
        if not rows or rows[0][0] is None:
            return None
        return rows[0][0].strip().rstrip(";")

    def columns(self, table: str) -> List[ColumnInfo]:
        """Attributes of a table in attnum order, with their types and defaults."""
        with self._error_context("column lookup", table):
            rows = self._relation_query(COLUMN_SQL, table)
        return [
            ColumnInfo(
                name=name,
                sql_type=sql_type,
                type_name=type_name,
                default=default,
                default_function=default_function(default),
                null=not not_null,
            )
            for name, sql_type, type_name, default, not_null in rows
        ]


__all__ = [
    "CatalogRepository",
    "namespace_filter",
    "INDEX_SQL",
    "ATTRIBUTE_SQL",
    "OPERATOR_CLASS_SQL",
    "FOREIGN_KEY_SQL",
    "REVERSE_FOREIGN_KEY_SQL",
    "ENUM_SQL",
    "VIEW_SQL",
    "VIEW_DEFINITION_SQL",
    "COLUMN_SQL",
]
