"""Expense split data access"""
from typing import List, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from household_ledger.models.expense import Expense
from household_ledger.models.expense_split import ExpenseSplit


class SplitRepository:
    """Repository for ExpenseSplit database operations"""

    @staticmethod
    async def create_batch(db: AsyncSession, splits: List[ExpenseSplit]) -> List[ExpenseSplit]:
        """
        Create multiple splits in a batch.

        Args:
            db: Database session
            splits: List of ExpenseSplit objects

        Returns:
            List of created splits
        """
        db.add_all(splits)
        await db.flush()

        for split in splits:
            await db.refresh(split)

        return splits

    @staticmethod
    async def get_unsettled_for_household(
        db: AsyncSession, household_id: UUID
    ) -> List[ExpenseSplit]:
        """
        Get all unsettled splits of a household with their expense loaded.

        Ordered oldest expense first so settlement closes older debts first.

        Args:
            db: Database session
            household_id: Household UUID

        Returns:
            List of splits
        """
        result = await db.execute(
            select(ExpenseSplit)
            .join(ExpenseSplit.expense)
            .where(
                Expense.household_id == household_id,
                ExpenseSplit.is_settled.is_(False),
            )
            .options(contains_eager(ExpenseSplit.expense))
            .order_by(Expense.date, Expense.created_at, ExpenseSplit.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_expense(db: AsyncSession, expense_id: UUID) -> List[ExpenseSplit]:
        """
        Get all splits of an expense.

        Args:
            db: Database session
            expense_id: Expense UUID

        Returns:
            List of splits
        """
        result = await db.execute(
            select(ExpenseSplit).where(ExpenseSplit.expense_id == expense_id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def mark_settled(db: AsyncSession, split_ids: Sequence[UUID]) -> int:
        """
        Flip splits to settled, skipping any already settled.

        Args:
            db: Database session
            split_ids: Split UUIDs

        Returns:
            Number of splits actually changed
        """
        if not split_ids:
            return 0

        result = await db.execute(
            update(ExpenseSplit)
            .where(
                ExpenseSplit.id.in_(list(split_ids)),
                ExpenseSplit.is_settled.is_(False),
            )
            .values(is_settled=True)
            .execution_options(synchronize_session=False)
        )
        await db.flush()
        return result.rowcount
