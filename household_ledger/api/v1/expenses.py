"""Expense endpoints"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.api.deps import get_acting_member
from household_ledger.core.exceptions import NotFoundError, ValidationError
from household_ledger.database import get_db
from household_ledger.models.member import Member
from household_ledger.schemas.expense import (ExpenseCreate, ExpenseListResponse,
                                              ExpenseResponse)
from household_ledger.services.expense_service import ExpenseService

router = APIRouter(prefix="/households/{household_id}/expenses", tags=["Expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    household_id: UUID,
    expense_data: ExpenseCreate,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new expense paid by the acting member.

    `equal` splits the amount among every household member; `custom` uses
    the supplied per-member amounts, which must add up to the total.

    Raises:
        400: If validation fails
    """
    try:
        expense = await ExpenseService.create_expense(
            household_id, current_member.id, expense_data, db
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return ExpenseResponse.model_validate(expense)


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    household_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """Get the household's expenses with the acting member's share."""
    items = await ExpenseService.list_household_expenses(
        household_id, current_member.id, db
    )

    return ExpenseListResponse(items=items)


@router.post("/{expense_id}/settle", response_model=ExpenseResponse)
async def settle_expense(
    household_id: UUID,
    expense_id: UUID,
    current_member: Member = Depends(get_acting_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Mark an expense settled.

    The payer settles every open split; other members settle their own.

    Raises:
        400: If there is nothing left to settle
        403: If the member has no share in the expense
        404: If the expense doesn't exist in this household
    """
    try:
        expense = await ExpenseService.settle_expense(
            household_id, expense_id, current_member.id, db
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return ExpenseResponse.model_validate(expense)
