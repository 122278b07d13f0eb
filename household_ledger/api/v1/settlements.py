"""Settlement endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.api.deps import get_acting_member
from household_ledger.core.exceptions import ValidationError
from household_ledger.database import get_db
from household_ledger.models.member import Member
from household_ledger.schemas.settlement import (CompletedSettlementListResponse,
                                                 PaymentNoteResponse,
                                                 SettlementRequest)
from household_ledger.services.settlement_service import SettlementService

router = APIRouter(prefix="/households/{household_id}/settlements", tags=["Settlements"])


@router.post("", response_model=PaymentNoteResponse, status_code=status.HTTP_201_CREATED)
async def settle_balance(
    household_id: UUID,
    settlement: SettlementRequest,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Record a payment from one member to another.

    The amount must be greater than zero and at most the outstanding
    balance. A full payment settles every split behind the balance; a
    partial payment settles the oldest splits it fully covers.

    Raises:
        400: If the amount is out of range
        403: If the acting member is neither payer nor recipient
        404: If there is no outstanding balance in that direction
        409: If the splits were settled concurrently
        500: If the payment could not be stored
    """
    try:
        payment_note = await SettlementService.settle_between(
            household_id,
            current_member.id,
            settlement.from_user_id,
            settlement.to_user_id,
            settlement.amount,
            settlement.note,
            db,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return PaymentNoteResponse.model_validate(payment_note)


@router.get("", response_model=CompletedSettlementListResponse)
async def list_settlements(
    household_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """Get the household's settlement history, newest first."""
    settlements = await SettlementService.get_completed_settlements(household_id, db)

    return CompletedSettlementListResponse(settlements=settlements)
