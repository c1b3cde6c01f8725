# ============================================================================
# ENUM TYPE & VIEW MODELS
# ============================================================================
# STATUS: Core model - Introspected enum types and views
# PURPOSE: Value objects returned by the enum and view introspection paths
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: EnumDescriptor, ViewDescriptor
# DEPENDENCIES: pydantic
# ============================================================================

from typing import List

from pydantic import BaseModel, Field


class EnumDescriptor(BaseModel):
    """
    A PostgreSQL enum type.

    labels are in pg_enum.enumsortorder order.
    """
    schema_name: str = Field(..., alias="schema")
    name: str
    labels: List[str] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"


class ViewDescriptor(BaseModel):
    """A view and its SELECT text (trailing semicolon removed)."""
    name: str
    definition: str

    model_config = {"frozen": True}


__all__ = ["EnumDescriptor", "ViewDescriptor"]
