# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors, models, and schema utilities
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import (
    Connection,
    DB_DEFAULT,
    DefaultFunction,
    ReferentialAction,
    SortOrder,
)
from core.errors import (
    SchemaError,
    SchemaValidationError,
    InvalidDefaultExpression,
    MissingIndexTarget,
    ConflictingIndexOptions,
    CorruptIndexCatalogRow,
)
from core.models import (
    ColumnDefaultSpec,
    ColumnInfo,
    IndexOptions,
    IndexDescriptor,
    ForeignKeyDescriptor,
    EnumDescriptor,
    ViewDescriptor,
)
from core.schema import IndexBuilder, EnumBuilder, build_default_clause

__all__ = [
    # Contracts
    "Connection",
    "DB_DEFAULT",
    "DefaultFunction",
    "ReferentialAction",
    "SortOrder",
    # Errors
    "SchemaError",
    "SchemaValidationError",
    "InvalidDefaultExpression",
    "MissingIndexTarget",
    "ConflictingIndexOptions",
    "CorruptIndexCatalogRow",
    # Models
    "ColumnDefaultSpec",
    "ColumnInfo",
    "IndexOptions",
    "IndexDescriptor",
    "ForeignKeyDescriptor",
    "EnumDescriptor",
    "ViewDescriptor",
    # Schema
    "IndexBuilder",
    "EnumBuilder",
    "build_default_clause",
]
