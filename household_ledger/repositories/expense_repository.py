"""Expense data access"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from household_ledger.models.expense import Expense


class ExpenseRepository:
    """Repository for Expense database operations"""

    @staticmethod
    async def create(db: AsyncSession, expense: Expense) -> Expense:
        """
        Create a new expense.

        Args:
            db: Database session
            expense: Expense object to create

        Returns:
            Created expense
        """
        db.add(expense)
        await db.flush()
        await db.refresh(expense)
        return expense

    @staticmethod
    async def get_with_splits(
        db: AsyncSession, expense_id: UUID
    ) -> Optional[Expense]:
        """
        Get expense with all splits eagerly loaded.

        Args:
            db: Database session
            expense_id: Expense UUID

        Returns:
            Expense with splits if found, None otherwise
        """
        result = await db.execute(
            select(Expense)
            .where(Expense.id == expense_id)
            .options(selectinload(Expense.splits))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_household_expenses(
        db: AsyncSession, household_id: UUID
    ) -> List[Expense]:
        """
        Get all expenses of a household, most recent first.

        Args:
            db: Database session
            household_id: Household UUID

        Returns:
            List of expenses with splits loaded
        """
        result = await db.execute(
            select(Expense)
            .where(Expense.household_id == household_id)
            .order_by(Expense.date.desc(), Expense.created_at.desc())
            .options(selectinload(Expense.splits))
        )
        return list(result.scalars().all())
