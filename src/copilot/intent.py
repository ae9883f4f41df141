"""
QueryIntent -- the structured intermediate representation between a
natural-language question and its execution over the dataset.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OperationKind(str, Enum):
    """Aggregation requested by a question.

    The value doubles as the projection in the rendered pseudo-query.
    """

    SELECT = "SELECT"
    COUNT = "COUNT"
    SUM = "SUM"
    AVERAGE = "AVG"


class FilterSet(BaseModel):
    """Row predicates, combined with AND.  ``None`` means unconstrained."""

    model_config = ConfigDict(extra="forbid")

    region: list[str] | None = Field(
        None, description="Lower-cased candidate regions, e.g. ['north', 'south']"
    )
    product: str | None = Field(None, description="Lower-cased product name, e.g. 'laptop'")

    def is_empty(self) -> bool:
        return self.region is None and self.product is None


class QueryIntent(BaseModel):
    """Parsed representation of a question about the sales table."""

    source_table: str = Field("sales", description="Table the intent runs against")
    operation: OperationKind = Field(OperationKind.SELECT, description="Requested aggregation")
    filters: FilterSet = Field(default_factory=FilterSet)
