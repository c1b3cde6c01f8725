# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and the connection contract
# PURPOSE: Define shared symbols and the Connection protocol the core consumes
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ReferentialAction, SortOrder, DefaultFunction, Connection, DB_DEFAULT
# DEPENDENCIES: enum, typing
# ============================================================================
"""
Base contracts for the schema toolkit.

These are the symbols that cross boundaries:
- SQL (catalog text parsed into enums)
- Python (descriptors handed back to the caller)
- Connection (the only collaborator the core talks to)

Dialect adapters implement Connection; the core never reaches past it.
"""

from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


# ============================================================================
# REFERENTIAL ACTIONS
# ============================================================================

class ReferentialAction(str, Enum):
    """
    ON UPDATE / ON DELETE actions of a foreign key.

    Catalog text uses space-separated upper case ("SET NULL");
    values here are the lowercase-underscored symbol ("set_null").
    """
    NO_ACTION = "no_action"
    RESTRICT = "restrict"
    CASCADE = "cascade"
    SET_NULL = "set_null"
    SET_DEFAULT = "set_default"

    @classmethod
    def from_sql(cls, text: Optional[str]) -> "ReferentialAction":
        """Normalize a catalog action token; absence means NO ACTION."""
        if not text:
            return cls.NO_ACTION
        # PostgreSQL 15+ may append a column list: SET NULL (col)
        return cls("_".join(text.split("(")[0].lower().split()))

    def to_sql(self) -> str:
        return self.value.replace("_", " ").upper()


class SortOrder(str, Enum):
    """Index column sort order. ASC is the implicit default."""
    ASC = "asc"
    DESC = "desc"


class DefaultFunction(str, Enum):
    """
    Portable symbolic column defaults.

    Only members of this enum are resolved to dialect SQL; a plain
    string with the same text is a literal default.
    """
    NOW = "now"
    CURRENT_TIMESTAMP = "current_timestamp"
    CURRENT_DATE = "current_date"


class _DbDefault:
    """Sentinel bound in place of a parameter to emit the DEFAULT keyword."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DB_DEFAULT"


DB_DEFAULT = _DbDefault()


# ============================================================================
# CONNECTION CONTRACT
# ============================================================================

Row = Tuple[Any, ...]


@runtime_checkable
class Connection(Protocol):
    """
    Synchronous connection contract consumed by the core.

    Statements may be plain strings or psycopg.sql composables.
    query() must preserve row and column order as emitted by the database.
    """

    def execute(self, statement: Any, params: Optional[Sequence[Any]] = None) -> None:
        ...

    def query(self, statement: Any, params: Optional[Sequence[Any]] = None) -> List[Row]:
        ...

    def quote_identifier(self, name: str) -> str:
        ...

    def quote_table_name(self, name: str) -> str:
        ...

    def columns(self, table: str) -> Sequence[Any]:
        ...


__all__ = [
    "ReferentialAction",
    "SortOrder",
    "DefaultFunction",
    "DB_DEFAULT",
    "Row",
    "Connection",
]
