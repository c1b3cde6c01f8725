# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - SQL DDL generation
# PURPOSE: Index and enum statement builders using psycopg.sql
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: IndexBuilder, EnumBuilder, table_identifier, enum_identifier
# DEPENDENCIES: psycopg, pydantic
# ============================================================================
"""
DDL Utilities - SQL Generation Patterns.

All methods return psycopg.sql.Composed objects for safe execution.
Identifiers are always composed with sql.Identifier; raw SQL is only
accepted where the caller explicitly supplies SQL (expressions,
predicates, operator classes).

Usage:
    from core.schema.ddl_utils import IndexBuilder, EnumBuilder

    # Unique index on one column
    stmt = IndexBuilder.create_index("users", "email", {"unique": True})
    cursor.execute(stmt)

    # Enum type
    cursor.execute(EnumBuilder.create("color", ["red", "green"]))
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from psycopg import sql

from core.config.defaults import DialectCapabilities, IndexNamingDefaults
from core.contracts import SortOrder
from core.errors import (
    ConflictingIndexOptions,
    MissingIndexTarget,
    SchemaValidationError,
)
from core.models.index import IndexOptions
from core.schema.parsers import split_table_name

# Expressions already carrying these clauses are not wrapped in parentheses
_EXPRESSION_CLAUSES = re.compile(r"\b(using|with|tablespace|where)\b", re.IGNORECASE)
_ACCESS_METHOD = re.compile(r"\A\w+\Z")


# ============================================================================
# IDENTIFIERS
# ============================================================================

def table_identifier(name: str) -> sql.Identifier:
    """Quote a possibly schema-qualified table name ("s.t" -> "s"."t")."""
    schema, table = split_table_name(name)
    if schema:
        return sql.Identifier(schema, table)
    return sql.Identifier(table)


def enum_identifier(name: str, schema: Optional[str] = None) -> sql.Identifier:
    """Enum type names are always schema-qualified, public by default."""
    return sql.Identifier(schema or "public", name)


# ============================================================================
# INDEX BUILDER
# ============================================================================

class IndexBuilder:
    """
    Builder for PostgreSQL CREATE INDEX statements.

    All methods are static and return sql.Composed objects.
    """

    @staticmethod
    def normalize_columns(
        columns: Union[None, str, Sequence[str]],
        options: IndexOptions,
    ) -> List[str]:
        """Single column or sequence, plus any `with` columns."""
        if columns is None:
            names = []
        elif isinstance(columns, str):
            names = [columns]
        else:
            names = [c for c in columns if c is not None]
        return [str(c) for c in names] + list(options.with_columns)

    @staticmethod
    def normalize_options(options: Union[None, IndexOptions, Mapping[str, Any]]) -> IndexOptions:
        if isinstance(options, IndexOptions):
            return options
        return IndexOptions.model_validate(dict(options or {}))

    @staticmethod
    def _operator_classes(columns: List[str], options: IndexOptions) -> Dict[str, str]:
        """One class broadcast to every column, or a per-column mapping."""
        if options.operator_class is None:
            return {}
        if isinstance(options.operator_class, str):
            return {column: options.operator_class for column in columns}
        return dict(options.operator_class)

    @staticmethod
    def _orders(columns: List[str], options: IndexOptions) -> Dict[str, SortOrder]:
        if options.order is None:
            return {}
        if isinstance(options.order, SortOrder):
            return {column: options.order for column in columns}
        return dict(options.order)

    @staticmethod
    def check_options(table: str, columns: List[str], options: IndexOptions,
                       capabilities: DialectCapabilities) -> None:
        """Reject malformed requests before any SQL is built."""
        if not columns:
            if not options.expression:
                raise MissingIndexTarget(
                    "No columns and no expression given - cannot create index", table=table
                )
            if not options.name:
                raise MissingIndexTarget(
                    "Index name not given for an expression index - pass name", table=table
                )
        if options.expression:
            if not options.case_sensitive:
                raise ConflictingIndexOptions(
                    "Cannot specify case_sensitive=False with an expression. "
                    "Use LOWER(column_name) in the expression",
                    field="case_sensitive",
                )
            if options.operator_class is not None:
                raise ConflictingIndexOptions(
                    "Cannot specify operator_class with an expression. "
                    "Put the operator class in the expression",
                    field="operator_class",
                )
        if options.conditions and not capabilities.supports_partial_indexes:
            raise ConflictingIndexOptions(
                f"{capabilities.name} does not support partial indexes",
                field="conditions",
            )
        if options.kind and not _ACCESS_METHOD.match(options.kind):
            raise SchemaValidationError(
                f"Invalid index access method: {options.kind!r}",
                field="kind",
                value=options.kind,
                operation="add_index",
            )

    @staticmethod
    def index_name(
        table: str,
        columns: List[str],
        options: IndexOptions,
        naming: Optional[IndexNamingDefaults] = None,
    ) -> str:
        """Explicit name, or one derived from table and columns."""
        if options.name:
            return options.name
        naming = naming or IndexNamingDefaults()
        return naming.index_name(table, columns, unique=options.unique)

    @staticmethod
    def create_index(
        table: str,
        columns: Union[None, str, Sequence[str]],
        options: Union[None, IndexOptions, Mapping[str, Any]] = None,
        caseable_columns: Optional[Iterable[str]] = None,
        naming: Optional[IndexNamingDefaults] = None,
        capabilities: Optional[DialectCapabilities] = None,
    ) -> sql.Composed:
        """
        Create index statement.

        Args:
            table: Table name, optionally schema-qualified
            columns: Column name(s) to index; may be empty with an expression
            options: IndexOptions or an equivalent mapping
            caseable_columns: Character-typed columns of the table; only
                these are wrapped in LOWER() when case_sensitive=False
            naming: Index naming conventions
            capabilities: Target dialect capabilities

        Returns:
            sql.Composed CREATE INDEX statement

        Raises:
            MissingIndexTarget: no columns and no expression (or no name)
            ConflictingIndexOptions: expression combined with
                case_sensitive=False or operator_class
        """
        capabilities = capabilities or DialectCapabilities()
        options = IndexBuilder.normalize_options(options)
        column_names = IndexBuilder.normalize_columns(columns, options)
        IndexBuilder.check_options(table, column_names, options, capabilities)

        head = sql.SQL("CREATE {unique}INDEX {name} ON {table}").format(
            unique=sql.SQL("UNIQUE ") if options.unique else sql.SQL(""),
            name=sql.Identifier(IndexBuilder.index_name(table, column_names, options, naming)),
            table=table_identifier(table),
        )

        if options.expression:
            body = IndexBuilder._expression_body(options)
        else:
            body = IndexBuilder._column_body(column_names, options, caseable_columns)

        return sql.SQL("{} {}").format(head, body)

    @staticmethod
    def _expression_body(options: IndexOptions) -> sql.Composable:
        expression = options.expression
        if _EXPRESSION_CLAUSES.search(expression):
            body: sql.Composable = sql.SQL(expression)
        else:
            body = sql.SQL("({})").format(sql.SQL(expression))
        if options.kind:
            body = sql.SQL("USING {} {}").format(sql.SQL(options.kind), body)
        if options.conditions:
            body = sql.SQL("{} WHERE {}").format(body, sql.SQL(options.conditions))
        return body

    @staticmethod
    def _column_body(
        column_names: List[str],
        options: IndexOptions,
        caseable_columns: Optional[Iterable[str]],
    ) -> sql.Composable:
        operator_classes = IndexBuilder._operator_classes(column_names, options)
        orders = IndexBuilder._orders(column_names, options)
        lowered = set() if options.case_sensitive else set(caseable_columns or ())

        parts = []
        for column in column_names:
            part: sql.Composable = sql.Identifier(column)
            if column in lowered:
                part = sql.SQL("LOWER({})").format(part)
            if operator_classes.get(column):
                part = sql.SQL("{} {}").format(part, sql.SQL(operator_classes[column]))
            if column in orders:
                part = sql.SQL("{} {}").format(part, sql.SQL(SortOrder(orders[column]).value.upper()))
            parts.append(part)

        body: sql.Composable = sql.SQL("({})").format(sql.SQL(", ").join(parts))
        if options.kind:
            body = sql.SQL("USING {} {}").format(sql.SQL(options.kind), body)
        if options.conditions:
            body = sql.SQL("{} WHERE ({})").format(body, sql.SQL(options.conditions))
        return body


# ============================================================================
# ENUM BUILDER
# ============================================================================

def escape_enum_value(value: str) -> sql.SQL:
    """Quote an enum label, doubling embedded single quotes."""
    return sql.SQL("'{}'".format(str(value).replace("'", "''")))


class EnumBuilder:
    """
    Builder for PostgreSQL enum type DDL.
    """

    @staticmethod
    def create(name: str, labels: Sequence[str], schema: Optional[str] = None) -> sql.Composed:
        """CREATE TYPE "schema"."name" AS ENUM ('a','b')."""
        return sql.SQL("CREATE TYPE {} AS ENUM ({})").format(
            enum_identifier(name, schema),
            sql.SQL(",").join(escape_enum_value(label) for label in labels),
        )

    @staticmethod
    def alter(
        name: str,
        value: str,
        before: Optional[str] = None,
        after: Optional[str] = None,
        schema: Optional[str] = None,
    ) -> sql.Composed:
        """ALTER TYPE ... ADD VALUE, optionally placed BEFORE or AFTER a label."""
        if before is not None and after is not None:
            raise SchemaValidationError(
                "Pass either before or after, not both",
                field="before",
                value=(before, after),
                operation="alter_enum",
            )
        stmt = sql.SQL("ALTER TYPE {} ADD VALUE {}").format(
            enum_identifier(name, schema),
            escape_enum_value(value),
        )
        if before is not None:
            stmt = sql.SQL("{} BEFORE {}").format(stmt, escape_enum_value(before))
        elif after is not None:
            stmt = sql.SQL("{} AFTER {}").format(stmt, escape_enum_value(after))
        return stmt

    @staticmethod
    def drop(name: str, schema: Optional[str] = None) -> sql.Composed:
        return sql.SQL("DROP TYPE {}").format(enum_identifier(name, schema))


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "table_identifier",
    "enum_identifier",
    "escape_enum_value",
    "IndexBuilder",
    "EnumBuilder",
]
