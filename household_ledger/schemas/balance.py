"""Balance schemas"""
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel

from household_ledger.schemas.member import MemberSummary
from household_ledger.schemas.split import SplitRecord


class Balance(BaseModel):
    """Net debt from one member to another after netting unsettled splits"""
    from_user: MemberSummary
    to_user: MemberSummary
    amount: Decimal
    related_splits: List[SplitRecord]
    payment_link: Optional[str] = None


class BalanceListResponse(BaseModel):
    """Response schema for list of balances"""
    balances: List[Balance]


class BalanceSummary(BaseModel):
    """Summary of one member's overall balance situation"""
    overall_balance: Decimal
    total_you_owe: Decimal
    total_owed_to_you: Decimal
    num_people_you_owe: int
    num_people_owe_you: int


class MemberPosition(BaseModel):
    """A member's net position across the whole household"""
    member: MemberSummary
    amount: Decimal
    type: Literal["owed", "owes"]


class MemberPositionListResponse(BaseModel):
    """Response schema for member positions"""
    positions: List[MemberPosition]
