# ============================================================================
# COLUMN MODELS
# ============================================================================
# STATUS: Core model - Column defaults and catalog column info
# PURPOSE: Normalized default specification and introspected column rows
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ColumnDefaultSpec, ColumnInfo
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Models

ColumnDefaultSpec is what a caller hands the DDL builder when adding or
changing a column default. ColumnInfo is what the catalog layer returns
for each attribute of a table.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field

from core.contracts import DefaultFunction


class ColumnDefaultSpec(BaseModel):
    """
    Normalized column default.

    - value: literal default, handled by the caller's normal path
    - expression: raw SQL or a DefaultFunction token
    - nullable: None means "not specified", which must stay distinct
      from an explicit False so later column alterations still work
    """
    value: Any = None
    expression: Optional[Union[DefaultFunction, str]] = None
    nullable: Optional[bool] = None

    model_config = {"frozen": True}

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ColumnDefaultSpec":
        """
        Build from add-column style options.

        Accepts {"default": {"expr": ...}}, {"default": {"value": ...}}
        or a plain {"default": ...}, plus an optional "null" flag.
        """
        default = options.get("default")
        nullable = options.get("null")

        if isinstance(default, Mapping) and set(default.keys()) in ({"expr"}, {"value"}):
            return cls(
                value=default.get("value"),
                expression=default.get("expr"),
                nullable=nullable,
            )

        if isinstance(default, DefaultFunction):
            return cls(expression=default, nullable=nullable)

        return cls(value=default, nullable=nullable)


class ColumnInfo(BaseModel):
    """
    One attribute of a table as reported by the catalog.

    Maps to: pg_attribute joined with pg_type and pg_attrdef
    """
    name: str
    sql_type: str = Field(..., description="format_type() rendering, e.g. 'character varying(255)'")
    type_name: str = Field(..., description="pg_type.typname, e.g. 'varchar'")
    default: Optional[str] = Field(default=None, description="Default as rendered by pg_get_expr()")
    default_function: Optional[str] = Field(
        default=None,
        description="Default text when it is an expression rather than a literal",
    )
    null: bool = True

    model_config = {"frozen": True}

    @property
    def type(self) -> str:
        """Alias used by the connection contract's columns() lookup."""
        return self.type_name

    def default_options(self) -> Optional[Dict[str, Any]]:
        """Column options reproducing an expression default, if any."""
        if self.default_function is None:
            return None
        return {"default": {"expr": self.default_function}}


__all__ = ["ColumnDefaultSpec", "ColumnInfo"]
