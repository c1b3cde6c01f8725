# ============================================================================
# FOREIGN KEY MODEL
# ============================================================================
# STATUS: Core model - Introspected foreign key constraint
# PURPOSE: Structured form of a pg_get_constraintdef() FOREIGN KEY string
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ForeignKeyDescriptor
# DEPENDENCIES: pydantic
# ============================================================================

from typing import List, Literal, Union

from pydantic import BaseModel, Field, model_validator

from core.contracts import ReferentialAction


class ForeignKeyDescriptor(BaseModel):
    """
    A reverse-engineered foreign key.

    column_names and references_column_names correspond by position.
    deferrable is False, True (DEFERRABLE INITIALLY IMMEDIATE) or
    "initially_deferred".
    """
    name: str
    from_table: str
    to_table: str
    column_names: List[str] = Field(..., min_length=1)
    references_column_names: List[str] = Field(..., min_length=1)
    on_update: ReferentialAction = ReferentialAction.NO_ACTION
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    deferrable: Union[bool, Literal["initially_deferred"]] = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_alignment(self) -> "ForeignKeyDescriptor":
        if len(self.column_names) != len(self.references_column_names):
            raise ValueError(
                f"Foreign key {self.name}: {len(self.column_names)} columns reference "
                f"{len(self.references_column_names)} columns"
            )
        return self


__all__ = ["ForeignKeyDescriptor"]
