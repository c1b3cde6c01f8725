# ============================================================================
# INDEX MODELS
# ============================================================================
# STATUS: Core model - Index build options and introspected descriptors
# PURPOSE: One shape shared by the DDL builder and the index reverse-engineer
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: IndexOptions, IndexDescriptor
# DEPENDENCIES: pydantic
# ============================================================================
"""
Index Models

IndexOptions is the request side (what add_index accepts).
IndexDescriptor is the result side (what indexes() returns). A descriptor's
fields map back onto IndexOptions so a dumped index can be rebuilt:

    descriptor = indexes("users")[0]
    add_index(descriptor.table, descriptor.columns, descriptor.to_options())
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import SortOrder


class IndexOptions(BaseModel):
    """
    Options accepted when building a CREATE INDEX statement.

    - operator_class: one class for every column, or column -> class
    - order: one sort order for every column, or column -> order
    - case_sensitive=False: wraps character columns in LOWER()
    - expression: raw SQL indexed instead of the column list
    """
    name: Optional[str] = None
    unique: bool = False
    with_columns: List[str] = Field(default_factory=list, alias="with")
    conditions: Optional[str] = None
    kind: Optional[str] = None
    operator_class: Optional[Union[str, Dict[str, str]]] = None
    order: Optional[Union[SortOrder, Dict[str, SortOrder]]] = None
    expression: Optional[str] = None
    case_sensitive: bool = True

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @field_validator("with_columns", mode="before")
    @classmethod
    def handle_string_input(cls, v):
        """Allow single string as shorthand for single-item list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v):
        """Accept 'DESC' / 'desc' alike."""
        if isinstance(v, str):
            return v.lower()
        if isinstance(v, dict):
            return {k: o.lower() if isinstance(o, str) else o for k, o in v.items()}
        return v


class IndexDescriptor(BaseModel):
    """
    A reverse-engineered index.

    Invariant: either columns is non-empty or expression is present.
    Orders are only recorded when at least one column is DESC.
    Operator classes are only recorded when not the type's default.
    """
    table: str
    columns: List[str] = Field(default_factory=list)
    name: str
    unique: bool = False
    kind: Optional[str] = Field(default=None, description="Access method; None for btree")
    expression: Optional[str] = None
    conditions: Optional[str] = Field(default=None, description="Partial index predicate")
    case_sensitive: bool = True
    orders: Dict[str, SortOrder] = Field(default_factory=dict)
    operator_classes: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_target(self) -> "IndexDescriptor":
        if not self.columns and not self.expression:
            raise ValueError(f"Index {self.name} has neither columns nor an expression")
        return self

    def to_options(self) -> Dict[str, Any]:
        """Options that rebuild this index through add_index()."""
        options: Dict[str, Any] = {"name": self.name}
        if self.unique:
            options["unique"] = True
        if self.kind:
            options["kind"] = self.kind
        if self.conditions:
            options["conditions"] = self.conditions
        if not self.case_sensitive:
            options["case_sensitive"] = False
        elif self.expression:
            options["expression"] = self.expression
        if self.orders:
            options["order"] = {col: order.value for col, order in self.orders.items()}
        if self.operator_classes:
            options["operator_class"] = dict(self.operator_classes)
        return options


__all__ = ["IndexOptions", "IndexDescriptor"]
