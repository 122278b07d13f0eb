"""Balance endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.api.deps import get_acting_member
from household_ledger.database import get_db
from household_ledger.models.member import Member
from household_ledger.schemas.balance import (BalanceListResponse, BalanceSummary,
                                              MemberPositionListResponse)
from household_ledger.services.balance_service import BalanceService

router = APIRouter(prefix="/households/{household_id}/balances", tags=["Balances"])


@router.get("", response_model=BalanceListResponse)
async def get_balances(
    household_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Get all outstanding balances of the household.

    At most one balance is returned per pair of members, with reciprocal
    debts netted. Balances are sorted by amount (descending) and carry the
    splits they were computed from.
    """
    balances = await BalanceService.get_household_balances(household_id, db, use_cache=True)

    return BalanceListResponse(balances=balances)


@router.get("/summary", response_model=BalanceSummary)
async def get_balance_summary(
    household_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Get balance summary for the acting member.

    - Overall balance (positive = owed money, negative = owes money)
    - Total amount owed to the member
    - Total amount the member owes
    - Number of people involved in each direction
    """
    return await BalanceService.get_balance_summary(
        household_id, current_member.id, db, use_cache=True
    )


@router.get("/members", response_model=MemberPositionListResponse)
async def get_member_positions(
    household_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """Get every member's net position across the household."""
    positions = await BalanceService.get_member_positions(household_id, db)

    return MemberPositionListResponse(positions=positions)
