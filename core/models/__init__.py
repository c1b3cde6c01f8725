# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the schema toolkit. Descriptors are frozen value
objects: built fresh per introspection call and owned by the caller.
"""

from core.models.column import ColumnDefaultSpec, ColumnInfo
from core.models.index import IndexOptions, IndexDescriptor
from core.models.foreign_key import ForeignKeyDescriptor
from core.models.enum_type import EnumDescriptor, ViewDescriptor

__all__ = [
    # Columns
    "ColumnDefaultSpec",
    "ColumnInfo",
    # Indexes
    "IndexOptions",
    "IndexDescriptor",
    # Foreign keys
    "ForeignKeyDescriptor",
    # Enums and views
    "EnumDescriptor",
    "ViewDescriptor",
]
