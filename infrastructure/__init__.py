# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database connectivity and repository base
# PURPOSE: psycopg adapter for the Connection protocol
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the schema toolkit.

Provides:
- PsycopgConnection: Connection protocol over a psycopg 3 connection
- get_connection: Open a caller-owned connection from environment settings
- BaseRepository: Logging and error patterns shared by catalog repositories

Usage:
    from infrastructure import get_connection

    with get_connection() as conn:
        conn.query("SELECT 1")
"""

from infrastructure.base_repository import BaseRepository
from infrastructure.postgresql import (
    PsycopgConnection,
    substitute_db_default,
    get_connection,
)

__all__ = [
    # Repository base
    'BaseRepository',
    # PostgreSQL
    'PsycopgConnection',
    'substitute_db_default',
    'get_connection',
]
