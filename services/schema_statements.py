# ============================================================================
# SCHEMA STATEMENTS SERVICE
# ============================================================================
# STATUS: Service - DDL execution
# PURPOSE: Build and execute index, enum and column-default DDL on a connection
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Statements Service

Builds DDL with the core builders and runs it on a caller-supplied
connection. Argument errors are raised before anything is sent to the
database. A failure of add_index's CREATE INDEX statement is routed
through the exception classifier, which may translate it, re-raise it
or swallow it by returning.

Usage:
    statements = SchemaStatements(conn)
    statements.add_index("users", "email", unique=True)
    statements.create_enum("mood", ["sad", "ok", "happy"])
    statements.add_column("users", "created_at", "timestamptz",
                          {"default": {"expr": "now()"}, "null": False})
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from psycopg import sql

from core.config.defaults import DialectCapabilities, IndexNamingDefaults, get_defaults
from core.contracts import Connection
from core.logging import ComponentType, get_logger, log_context
from core.models.column import ColumnDefaultSpec
from core.models.index import IndexOptions
from core.schema.ddl_utils import EnumBuilder, IndexBuilder, table_identifier
from core.schema.default_expr import apply_column_options, build_default_clause

logger = get_logger(__name__, ComponentType.SERVICE)

# (connection, table, column_names, options, error) -> None
# Raising surfaces an error; returning swallows the failure
ExceptionClassifier = Callable[[Connection, str, List[str], Dict[str, Any], Exception], None]


def reraise(connection: Connection, table: str, column_names: List[str],
            options: Dict[str, Any], error: Exception) -> None:
    """Default classifier: surface the database error unchanged."""
    raise error


class SchemaStatements:
    """
    DDL operations against one connection.

    The connection is borrowed: it is never opened, committed or closed
    here. Callers own transaction boundaries.
    """

    def __init__(
        self,
        connection: Connection,
        capabilities: Optional[DialectCapabilities] = None,
        naming: Optional[IndexNamingDefaults] = None,
        exception_classifier: Optional[ExceptionClassifier] = None,
    ):
        """
        Initialize the service.

        Args:
            connection: Object implementing the Connection protocol
            capabilities: Target dialect capabilities (default: PostgreSQL)
            naming: Index naming conventions (default: from environment)
            exception_classifier: Called with the failing add_index
                request and the database error; the default re-raises
        """
        self.connection = connection
        self.capabilities = capabilities or DialectCapabilities()
        self.naming = naming or get_defaults().index_naming
        self.exception_classifier = exception_classifier or reraise

    def _execute(self, statement: sql.Composable, operation: str, entity_id: str) -> None:
        with log_context(operation=operation):
            self.connection.execute(statement)
        logger.info(f"{operation}: {entity_id}")

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def add_index(
        self,
        table: str,
        columns: Union[None, str, Sequence[str]] = None,
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> sql.Composed:
        """
        Create an index.

        Args:
            table: Table name, optionally schema-qualified
            columns: Column name(s); may be omitted with an expression
            options: IndexOptions fields as a mapping
            **kwargs: Same fields as keywords (override options)

        Returns:
            The executed CREATE INDEX statement

        Raises:
            MissingIndexTarget, ConflictingIndexOptions: before any SQL
            Whatever the exception classifier raises on database failure;
            if it returns instead, the failure is swallowed
        """
        index_options = IndexBuilder.normalize_options({**dict(options or {}), **kwargs})
        column_names = IndexBuilder.normalize_columns(columns, index_options)
        IndexBuilder.check_options(table, column_names, index_options, self.capabilities)

        with log_context(table=table, index=index_options.name):
            caseable = None
            if not index_options.case_sensitive:
                caseable = [
                    column.name for column in self.connection.columns(table)
                    if self.capabilities.is_character_type(column.type)
                ]

            statement = IndexBuilder.create_index(
                table,
                column_names,
                index_options,
                caseable_columns=caseable,
                naming=self.naming,
                capabilities=self.capabilities,
            )

            try:
                self._execute(statement, "add_index", table)
            except Exception as e:
                logger.error(f"CREATE INDEX on {table} failed: {e}")
                self.exception_classifier(
                    self.connection,
                    table,
                    column_names,
                    self._request_options(index_options),
                    e,
                )
                logger.warning(f"CREATE INDEX failure on {table} suppressed by classifier")
        return statement

    @staticmethod
    def _request_options(options: IndexOptions) -> Dict[str, Any]:
        return options.model_dump(by_alias=True, exclude_defaults=True)

    # ------------------------------------------------------------------
    # Enum types
    # ------------------------------------------------------------------

    def create_enum(self, name: str, labels: Sequence[str], schema: Optional[str] = None) -> sql.Composed:
        statement = EnumBuilder.create(name, labels, schema)
        self._execute(statement, "create_enum", name)
        return statement

    def alter_enum(
        self,
        name: str,
        value: str,
        before: Optional[str] = None,
        after: Optional[str] = None,
        schema: Optional[str] = None,
    ) -> sql.Composed:
        """Add a label, optionally positioned before or after an existing one."""
        statement = EnumBuilder.alter(name, value, before=before, after=after, schema=schema)
        self._execute(statement, "alter_enum", name)
        return statement

    def drop_enum(self, name: str, schema: Optional[str] = None) -> sql.Composed:
        statement = EnumBuilder.drop(name, schema)
        self._execute(statement, "drop_enum", name)
        return statement

    # ------------------------------------------------------------------
    # Column defaults
    # ------------------------------------------------------------------

    def add_column(
        self,
        table: str,
        column: str,
        sql_type: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> sql.Composed:
        """
        ALTER TABLE ... ADD COLUMN with literal or expression default.

        Expression defaults go through the default resolver; a literal
        default is bound as a SQL literal.
        """
        fragment, remaining = apply_column_options(options or {}, self.capabilities)
        statement = sql.SQL("ALTER TABLE {} ADD COLUMN {} {}").format(
            table_identifier(table),
            sql.Identifier(column),
            sql.SQL(sql_type),
        )
        if fragment is not None:
            statement = sql.SQL("{}{}").format(statement, fragment)
        else:
            if remaining.get("default") is not None:
                statement = sql.SQL("{} DEFAULT {}").format(statement, sql.Literal(remaining["default"]))
            if remaining.get("null") is False:
                statement = sql.SQL("{} NOT NULL").format(statement)

        with log_context(table=table):
            self._execute(statement, "add_column", f"{table}.{column}")
        return statement

    def change_column_default(self, table: str, column: str, default: Any) -> sql.Composed:
        """
        SET DEFAULT (expression or literal) or DROP DEFAULT when default is None.

        default accepts the same shapes as the add_column "default" option.
        """
        target = sql.SQL("ALTER TABLE {} ALTER COLUMN {}").format(
            table_identifier(table), sql.Identifier(column)
        )
        clause = build_default_clause(ColumnDefaultSpec.from_options({"default": default}), self.capabilities)
        if clause.is_expression:
            statement = sql.SQL("{} SET{}").format(target, clause.fragment)
        elif clause.value is None:
            statement = sql.SQL("{} DROP DEFAULT").format(target)
        else:
            statement = sql.SQL("{} SET DEFAULT {}").format(target, sql.Literal(clause.value))

        with log_context(table=table):
            self._execute(statement, "change_column_default", f"{table}.{column}")
        return statement


__all__ = ["SchemaStatements", "ExceptionClassifier", "reraise"]
