# ============================================================================
# ERROR TAXONOMY
# ============================================================================
# STATUS: Foundation - Exceptions raised by the schema toolkit
# PURPOSE: Distinguish argument errors from catalog invariant violations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema toolkit exceptions.

Argument errors (SchemaValidationError) are raised before any SQL is
issued. Driver errors (psycopg.Error) are never wrapped: they reach the
caller unchanged, or pass through the exception classifier for DDL.
"""

from typing import Any, Optional


class SchemaError(Exception):
    """Base exception for schema toolkit operations."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class SchemaValidationError(SchemaError, ValueError):
    """Raised when a request is malformed (detectable from arguments alone)."""

    def __init__(self, message: str, field: str = None, value: Any = None, operation: str = None):
        self.field = field
        self.value = value
        super().__init__(message, operation=operation)


class InvalidDefaultExpression(SchemaValidationError):
    """The dialect rejected an expression column default."""

    def __init__(self, expression: Optional[str]):
        super().__init__(
            f"Invalid default expression: {expression!r}",
            field="default",
            value=expression,
            operation="add_column_default",
        )


class MissingIndexTarget(SchemaValidationError):
    """No columns and no expression, or an expression index without a name."""

    def __init__(self, message: str, table: str = None):
        super().__init__(message, field="columns", value=table, operation="add_index")


class ConflictingIndexOptions(SchemaValidationError):
    """Index options that cannot be combined."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, field=field, operation="add_index")


class CorruptIndexCatalogRow(SchemaError):
    """A pg_index row with neither key columns nor an expression."""

    def __init__(self, index_name: str, table: str = None):
        self.index_name = index_name
        self.table = table
        super().__init__(
            f"Index {index_name} on {table} has no key columns and no expression",
            operation="indexes",
            entity_id=index_name,
        )


__all__ = [
    "SchemaError",
    "SchemaValidationError",
    "InvalidDefaultExpression",
    "MissingIndexTarget",
    "ConflictingIndexOptions",
    "CorruptIndexCatalogRow",
]
