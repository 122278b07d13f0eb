"""Expense business logic"""
import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.core.exceptions import (AuthorizationError, NotFoundError,
                                              ValidationError)
from household_ledger.models.expense import Expense
from household_ledger.models.expense_split import ExpenseSplit
from household_ledger.repositories.expense_repository import ExpenseRepository
from household_ledger.repositories.member_repository import MemberRepository
from household_ledger.repositories.split_repository import SplitRepository
from household_ledger.schemas.expense import ExpenseCreate, ExpenseListItem
from household_ledger.services.balance_service import BalanceService
from household_ledger.services.split_strategies import get_split_strategy

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense operations"""

    @staticmethod
    async def create_expense(
        household_id: UUID,
        payer_id: UUID,
        expense_data: ExpenseCreate,
        db: AsyncSession
    ) -> Expense:
        """
        Create a new expense paid by the acting member.

        The payer's own share is stored already settled.

        Args:
            household_id: Household the expense belongs to
            payer_id: Member who paid
            expense_data: Expense creation data
            db: Database session

        Returns:
            Created expense with splits

        Raises:
            ValidationError: If split validation fails
        """
        members = await MemberRepository.get_household_members(db, household_id)
        member_ids = [member.id for member in members]

        if payer_id not in member_ids:
            raise ValidationError("Payer is not a member of this household")

        strategy = get_split_strategy(expense_data.split_type)
        calculated_splits = strategy.calculate_splits(
            expense_data.amount,
            member_ids,
            expense_data.custom_splits or (),
        )

        # Begin transaction
        async with db.begin_nested():
            expense = Expense(
                household_id=household_id,
                description=expense_data.description,
                amount=expense_data.amount,
                paid_by=payer_id,
                date=expense_data.date,
                category=expense_data.category,
                split_type=expense_data.split_type,
            )

            created_expense = await ExpenseRepository.create(db, expense)

            splits = [
                ExpenseSplit(
                    expense_id=created_expense.id,
                    user_id=split.user_id,
                    amount_owed=split.amount_owed,
                    is_settled=split.user_id == payer_id,
                )
                for split in calculated_splits
                if split.amount_owed > 0
            ]

            await SplitRepository.create_batch(db, splits)

        await db.commit()
        await BalanceService.invalidate_household(household_id)

        logger.info(
            "Created expense %s of %s in household %s with %d splits",
            created_expense.id, expense_data.amount, household_id, len(splits),
        )

        return await ExpenseRepository.get_with_splits(db, created_expense.id)

    @staticmethod
    async def list_household_expenses(
        household_id: UUID,
        user_id: UUID,
        db: AsyncSession
    ) -> List[ExpenseListItem]:
        """
        Get expenses of a household from one member's point of view.

        Args:
            household_id: Household ID
            user_id: Member viewing the list
            db: Database session

        Returns:
            Expense list items, most recent first
        """
        expenses = await ExpenseRepository.get_household_expenses(db, household_id)
        members = await MemberRepository.get_household_members(db, household_id)
        names = {member.id: member.full_name or member.email for member in members}

        items: List[ExpenseListItem] = []
        for expense in expenses:
            user_split = next(
                (split for split in expense.splits if split.user_id == user_id), None
            )
            all_settled = all(split.is_settled for split in expense.splits)

            items.append(
                ExpenseListItem(
                    id=expense.id,
                    date=expense.date,
                    description=expense.description,
                    amount=expense.amount,
                    category=expense.category,
                    paid_by=expense.paid_by,
                    payer_name=names.get(expense.paid_by, "Unknown"),
                    your_share=user_split.amount_owed if user_split else Decimal("0"),
                    status="settled" if all_settled else "pending",
                )
            )

        return items

    @staticmethod
    async def settle_expense(
        household_id: UUID,
        expense_id: UUID,
        user_id: UUID,
        db: AsyncSession
    ) -> Expense:
        """
        Mark an expense settled from the acting member's side.

        The payer closes every open split (payment received outside the
        app); anyone else closes only their own split.

        Args:
            household_id: Household of the acting member
            expense_id: Expense ID
            user_id: Acting member ID
            db: Database session

        Returns:
            Updated expense

        Raises:
            NotFoundError: If expense not found in the household
            AuthorizationError: If the member has no share in the expense
            ValidationError: If there is nothing left to settle
        """
        expense = await ExpenseRepository.get_with_splits(db, expense_id)

        if not expense or expense.household_id != household_id:
            raise NotFoundError("Expense not found")

        if expense.paid_by == user_id:
            open_splits = [split for split in expense.splits if not split.is_settled]
            if not open_splits:
                raise ValidationError("All splits are already settled")
        else:
            user_split = next(
                (split for split in expense.splits if split.user_id == user_id), None
            )
            if user_split is None:
                raise AuthorizationError("You have no share in this expense")
            if user_split.is_settled:
                raise ValidationError("Your split is already settled")
            open_splits = [user_split]

        await SplitRepository.mark_settled(db, [split.id for split in open_splits])
        await db.commit()
        await BalanceService.invalidate_household(household_id)

        return await ExpenseRepository.get_with_splits(db, expense_id)
