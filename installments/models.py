from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class InstallmentDescriptor(BaseModel):
    """Installment N of M, optionally with the amount before the split."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    number: Number = Field(alias="numero")
    total: Number = Field(alias="total")
    original_amount: Optional[Number] = Field(default=None, alias="valor_original")

    def to_wire(self) -> Dict[str, Any]:
        # Same shape the parcela_info column stores
        return self.model_dump(by_alias=True, exclude_none=True)


class InstallmentRow(BaseModel):
    number: int
    total: int
    amount: float
    due_date: date
    month: str = Field(examples=["2024-01"])
    parcela_info: InstallmentDescriptor


class NormalizeRequest(BaseModel):
    raw: Any = None


class NormalizeResponse(BaseModel):
    shape: str
    descriptor: Optional[Dict[str, Any]] = Field(default=None, examples=[None])
    display: Optional[str] = Field(default=None, examples=["1/3"])


class DescribeRequest(BaseModel):
    description: str


class DescribeResponse(BaseModel):
    description: str
    base: str


class RemovalRequest(BaseModel):
    transaction: Dict[str, Any]
    candidates: List[Dict[str, Any]] = Field(default_factory=list)
    scope: Literal["single", "all"] = "all"


class RemovalResponse(BaseModel):
    ids: List[Any] = Field(default_factory=list)
    multi_installment: bool = False
    recurring: bool = False


class PlanRequest(BaseModel):
    total_amount: float
    count: int
    first_due_date: date


class PlanResponse(BaseModel):
    rows: List[InstallmentRow] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
