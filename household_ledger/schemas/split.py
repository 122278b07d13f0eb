"""Expense split schemas used by the balance engine"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SplitExpense(BaseModel):
    """Parent expense data embedded into a split row"""

    id: UUID
    description: str
    amount: Decimal
    paid_by: Optional[UUID] = None
    household_id: UUID
    date: date

    model_config = ConfigDict(from_attributes=True)


class SplitRecord(BaseModel):
    """
    A split row as read from the store.

    ``expense`` is optional: a row whose parent expense is missing is
    representable and is skipped by the calculator.
    """

    id: UUID
    expense_id: UUID
    user_id: UUID
    amount_owed: Decimal
    is_settled: bool = False
    expense: Optional[SplitExpense] = None

    model_config = ConfigDict(from_attributes=True)
