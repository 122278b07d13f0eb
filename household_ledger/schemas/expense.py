"""Expense schemas"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from household_ledger.models.expense import ExpenseCategory, SplitType


class CustomSplitInput(BaseModel):
    """Amount one member owes under a custom split"""

    user_id: UUID
    amount: Decimal = Field(..., ge=Decimal("0.01"))

    @field_validator("amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        """Convert numeric values to Decimal"""
        return Decimal(str(v))


class ExpenseCreate(BaseModel):
    """Schema for creating an expense"""

    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., gt=0)
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: date
    split_type: SplitType = SplitType.EQUAL
    custom_splits: Optional[List[CustomSplitInput]] = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v):
        """Convert amount to Decimal"""
        return Decimal(str(v))

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        """Trim whitespace around the description"""
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v

    @model_validator(mode="after")
    def validate_custom_splits(self):
        """Custom split type needs per-member amounts"""
        if self.split_type == SplitType.CUSTOM and not self.custom_splits:
            raise ValueError("Custom splits are required for custom split type")
        return self


class ExpenseSplitResponse(BaseModel):
    """Response schema for one split of an expense"""

    id: UUID
    user_id: UUID
    amount_owed: Decimal
    is_settled: bool

    model_config = ConfigDict(from_attributes=True)


class ExpenseResponse(BaseModel):
    """Complete expense response schema"""

    id: UUID
    household_id: UUID
    description: str
    amount: Decimal
    category: ExpenseCategory
    date: date
    split_type: SplitType
    paid_by: UUID
    splits: List[ExpenseSplitResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ExpenseListItem(BaseModel):
    """Schema for expense in the household list view"""

    id: UUID
    date: date
    description: str
    amount: Decimal
    category: ExpenseCategory
    paid_by: UUID
    payer_name: str
    your_share: Decimal
    status: str  # "settled" or "pending"


class ExpenseListResponse(BaseModel):
    """Response schema for expense list"""

    items: List[ExpenseListItem]
