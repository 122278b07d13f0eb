"""Settlement schemas"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from household_ledger.schemas.member import MemberSummary


class SettlementRequest(BaseModel):
    """Payment from one member to another"""

    from_user_id: UUID
    to_user_id: UUID
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    note: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def validate_parties(self):
        """A member cannot pay themselves"""
        if self.from_user_id == self.to_user_id:
            raise ValueError("from_user_id and to_user_id must differ")
        return self


class PaymentNoteResponse(BaseModel):
    """Stored payment note"""

    id: UUID
    from_user_id: UUID
    to_user_id: UUID
    amount: Decimal
    note: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompletedSettlement(BaseModel):
    """Payment note shaped for the settlement history view"""

    id: UUID
    from_user: MemberSummary
    to_user: MemberSummary
    amount: Decimal
    description: str
    note: Optional[str] = None
    status: Literal["completed"] = "completed"
    date: datetime


class CompletedSettlementListResponse(BaseModel):
    """Response schema for settlement history"""

    settlements: List[CompletedSettlement]
