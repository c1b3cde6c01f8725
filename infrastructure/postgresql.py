# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: psycopg 3 adapter implementing the Connection protocol
# CREATED: 19 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Adapts a synchronous psycopg 3 connection to the Connection protocol the
schema toolkit consumes:
- execute() / query() accept strings or psycopg.sql composables
- query() returns plain tuples in database column order
- DB_DEFAULT parameters become the DEFAULT keyword
- Context manager for callers that want the toolkit to open a connection

The adapter never closes, pools or commits a connection it was handed.

Usage:
    with psycopg.connect(conninfo, autocommit=True) as raw:
        conn = PsycopgConnection(raw)
        IndexRepository(conn).indexes("users")

    with get_connection() as conn:  # from DATABASE_URL / POSTGRES_*
        EnumRepository(conn).enums()
"""

import logging
import re
from contextlib import contextmanager
from typing import Any, List, Optional, Sequence, Tuple

import psycopg
from psycopg import sql
from psycopg.rows import tuple_row

from __version__ import __version__
from core.config.defaults import ConnectionDefaults
from core.contracts import DB_DEFAULT, Row
from core.schema.ddl_utils import table_identifier

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"%%|%s")


# ============================================================================
# DB_DEFAULT BIND SUBSTITUTION
# ============================================================================

def substitute_db_default(
    query: str,
    params: Optional[Sequence[Any]],
) -> Tuple[str, Optional[List[Any]]]:
    """
    Replace each %s bound to DB_DEFAULT with the DEFAULT keyword.

    psycopg cannot bind DEFAULT as a value, so the placeholder is
    rewritten and the sentinel dropped from the parameter list.

    >>> substitute_db_default("INSERT INTO t VALUES (%s, %s)", [DB_DEFAULT, 1])
    ('INSERT INTO t VALUES (DEFAULT, %s)', [1])
    """
    if not params or not any(p is DB_DEFAULT for p in params):
        return query, list(params) if params is not None else None

    values = iter(params)
    kept: List[Any] = []

    def replace(match: "re.Match") -> str:
        if match.group(0) == "%%":
            return "%%"
        value = next(values)
        if value is DB_DEFAULT:
            return "DEFAULT"
        kept.append(value)
        return "%s"

    return _PLACEHOLDER.sub(replace, query), kept


# ============================================================================
# CONNECTION ADAPTER
# ============================================================================

class PsycopgConnection:
    """
    Connection protocol implementation over psycopg 3.

    Usage:
        conn = PsycopgConnection(psycopg.connect(dsn, autocommit=True))
        rows = conn.query("SELECT 1")
    """

    def __init__(self, connection: psycopg.Connection):
        self._conn = connection

    @property
    def raw(self) -> psycopg.Connection:
        return self._conn

    def as_string(self, statement: Any) -> str:
        """Render a composable (or pass a string through) for logging."""
        if isinstance(statement, sql.Composable):
            return statement.as_string(self._conn)
        return str(statement)

    def _bind(self, statement: Any, params: Optional[Sequence[Any]]) -> Tuple[Any, Optional[Sequence[Any]]]:
        if params and any(p is DB_DEFAULT for p in params):
            return substitute_db_default(self.as_string(statement), params)
        return statement, params

    def execute(self, statement: Any, params: Optional[Sequence[Any]] = None) -> None:
        """Execute a statement without returning results."""
        statement, params = self._bind(statement, params)
        logger.debug(f"Executing: {self.as_string(statement)[:200]}")
        with self._conn.cursor() as cur:
            cur.execute(statement, params)

    def query(self, statement: Any, params: Optional[Sequence[Any]] = None) -> List[Row]:
        """Execute a query (or INSERT ... RETURNING) and fetch all rows as tuples."""
        statement, params = self._bind(statement, params)
        with self._conn.cursor(row_factory=tuple_row) as cur:
            cur.execute(statement, params)
            return cur.fetchall()

    def quote_identifier(self, name: str) -> str:
        return sql.Identifier(name).as_string(self._conn)

    def quote_table_name(self, name: str) -> str:
        return table_identifier(name).as_string(self._conn)

    def columns(self, table: str):
        """Column name/type lookup through the catalog layer."""
        from repositories.catalog_repo import CatalogRepository
        return CatalogRepository(self).columns(table)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

@contextmanager
def get_connection(
    conninfo: Optional[str] = None,
    autocommit: bool = True,
):
    """
    Context manager for a caller-owned PostgreSQL connection.

    Yields:
        PsycopgConnection wrapping a fresh psycopg connection

    Usage:
        with get_connection() as conn:
            conn.query("SELECT 1")
    """
    if conninfo is None:
        settings = ConnectionDefaults.from_env()
        conninfo = settings.conninfo
        logger.debug(f"Connecting to PostgreSQL: {settings.safe_conninfo}")

    conn = None
    try:
        conn = psycopg.connect(conninfo, autocommit=autocommit)
        logger.debug(f"PostgreSQL connection established (pgschema-plus {__version__})")
        yield PsycopgConnection(conn)

    except psycopg.Error as e:
        logger.error(f"PostgreSQL connection error: {e}")
        if conn and not autocommit:
            conn.rollback()
        raise

    finally:
        if conn:
            conn.close()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PsycopgConnection",
    "substitute_db_default",
    "get_connection",
]
