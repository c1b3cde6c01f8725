# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - In-memory Connection implementation
# PURPOSE: Serve canned catalog rows and record executed DDL
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shared test helpers.

FakeConnection implements the Connection protocol without a database.
Queries are rendered to text and matched against marker substrings in
insertion order; the first match supplies the rows.
"""

from psycopg import sql

from core.models.column import ColumnInfo


# Marker substrings unique to each catalog query
INDEXES = "pg_index"
ATTRIBUTES = "a.attrelid = %s"
OPCLASSES = "pg_opclass"
FOREIGN_KEYS = "f.conrelid = t.oid"
REVERSE_FOREIGN_KEYS = "f.confrelid = t.oid"
ENUMS = "pg_enum"
VIEWS = "pg_views"
VIEW_DEFINITION = "pg_get_viewdef"
COLUMNS = "format_type"


def render(statement) -> str:
    if isinstance(statement, sql.Composable):
        return statement.as_string(None)
    return str(statement)


class FakeConnection:
    """Connection protocol over canned rows."""

    def __init__(self, responses=None, columns=None, execute_error=None):
        self.responses = dict(responses or {})
        self.column_info = dict(columns or {})
        self.execute_error = execute_error
        self.executed = []
        self.queries = []
        self.column_calls = []

    def execute(self, statement, params=None):
        self.executed.append(render(statement))
        if self.execute_error is not None:
            raise self.execute_error

    def query(self, statement, params=None):
        text = render(statement)
        self.queries.append((text, params))
        for marker, rows in self.responses.items():
            if marker in text:
                if callable(rows):
                    return list(rows(params))
                if isinstance(rows, Exception):
                    raise rows
                return list(rows)
        return []

    def quote_identifier(self, name):
        return render(sql.Identifier(name))

    def quote_table_name(self, name):
        return render(sql.Identifier(*name.split(".")))

    def columns(self, table):
        self.column_calls.append(table)
        return self.column_info.get(table, [])


def column(name, type_name="text", sql_type=None, default=None, default_function=None, null=True):
    """ColumnInfo shorthand."""
    return ColumnInfo(
        name=name,
        sql_type=sql_type or type_name,
        type_name=type_name,
        default=default,
        default_function=default_function,
        null=null,
    )

