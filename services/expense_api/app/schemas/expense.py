from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExpenseInput(BaseModel):
    # label is stored exactly as sent; only an empty string is rejected
    tenant: str = Field(..., min_length=1)
    # strict: JSON numbers only, "10.5" as a string is refused
    amount: float = Field(..., strict=True, allow_inf_nan=False)

    @field_validator("amount")
    @classmethod
    def amount_must_be_present(cls, v: float) -> float:
        if v == 0:
            raise ValueError("amount is required and must be non-zero")
        return v


class BulkExpenseInput(BaseModel):
    expenses: List[ExpenseInput] = Field(..., min_length=1)


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tenant: str
    amount: float
    created_at: datetime


class ExpenseRecord(ExpenseResponse):
    """Full stored row, as returned by create and list."""
    user_id: int
    deleted_at: Optional[datetime] = None


class GroupedExpenseResponse(BaseModel):
    date: str  # e.g. "Tuesday, 05 March 2024"
    total: float = 0.0
    expenses: List[ExpenseResponse] = Field(default_factory=list)


class DayDetail(BaseModel):
    date: str
    total: float = 0.0
    expenses: List[ExpenseResponse] = Field(default_factory=list)


class CreateExpensesResponse(BaseModel):
    message: str
    data: List[ExpenseRecord]


class MessageResponse(BaseModel):
    message: str
