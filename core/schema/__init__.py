# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - DDL generation and catalog text parsing
# PURPOSE: Pure SQL composition; nothing here touches a connection
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    IndexBuilder,
    EnumBuilder,
    table_identifier,
    enum_identifier,
    escape_enum_value,
)
from core.schema.default_expr import (
    DefaultExpressionResolver,
    DefaultClause,
    build_default_clause,
    apply_column_options,
)

__all__ = [
    # Builders
    "IndexBuilder",
    "EnumBuilder",
    "table_identifier",
    "enum_identifier",
    "escape_enum_value",
    # Defaults
    "DefaultExpressionResolver",
    "DefaultClause",
    "build_default_clause",
    "apply_column_options",
]
