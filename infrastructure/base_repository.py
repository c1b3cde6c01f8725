# ============================================================================
# BASE REPOSITORY - ERROR HANDLING AND LOGGING PATTERNS
# ============================================================================
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Common connection handling, error logging, and query helpers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class that provides common infrastructure for all catalog
repositories:
- Caller-supplied connection (never opened, pooled or closed here)
- Consistent error logging with context managers
- Standardized operation logging

Driver errors are logged with context and re-raised as-is: callers see
the original psycopg exception, never a wrapper.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from core.contracts import Connection, Row
from core.errors import SchemaValidationError
from core.logging import ComponentType, get_logger, log_context


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Provides:
    - Error context manager for consistent error logging
    - Query helper with DEBUG logging
    - Standardized operation logging

    Subclasses implement catalog-specific operations.
    """

    def __init__(self, connection: Connection):
        """
        Initialize base repository.

        Args:
            connection: Object implementing the Connection protocol
        """
        self.connection = connection
        self.logger = get_logger(self.__class__.__name__, ComponentType.CATALOG)

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error logging.

        All exceptions are logged with context before being re-raised
        unchanged.

        Args:
            operation: Human-readable description of the operation
            entity_id: Optional entity (table, index, type) for context

        Example:
            with self._error_context("index introspection", "users"):
                rows = self._query(INDEX_SQL, params)
        """
        with log_context(operation=operation):
            try:
                yield
            except SchemaValidationError:
                # Already has context, just re-raise
                raise
            except Exception as e:
                self._log_operation(False, operation, entity_id or "*", {"error": str(e)})
                raise

    def _query(self, statement: Any, params: Optional[Sequence[Any]] = None) -> List[Row]:
        """Run a read-only catalog query; no caching."""
        rows = self.connection.query(statement, params)
        self.logger.debug(f"Catalog query returned {len(rows)} rows")
        return rows

    def _log_operation(
        self,
        success: bool,
        operation: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log operation result with consistent formatting.

        Format:
            Success: "operation: entity_id | details"
            Failure: "operation failed: entity_id | details"
        """
        if success:
            msg = f"{operation}: {entity_id}"
        else:
            msg = f"{operation} failed: {entity_id}"

        if details:
            msg += f" | {details}"

        if success:
            self.logger.info(msg)
        else:
            self.logger.error(msg)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "BaseRepository",
]
