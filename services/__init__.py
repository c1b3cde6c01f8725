# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Collaborator-facing layer
# PURPOSE: DDL execution and schema inspection services
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Entry points for migration tools and schema dumpers.
Services coordinate the core builders and the catalog repositories.

Usage:
    from services import SchemaInspector, SchemaStatements

    with get_connection() as conn:
        SchemaStatements(conn).add_index("users", "email", unique=True)
        indexes = SchemaInspector(conn).indexes("users")
"""

from .schema_statements import SchemaStatements, ExceptionClassifier, reraise
from .schema_inspector import SchemaInspector

__all__ = [
    "SchemaStatements",
    "ExceptionClassifier",
    "reraise",
    "SchemaInspector",
]
