"""Member data access"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.models.member import Member


class MemberRepository:
    """Repository for Member database operations"""

    @staticmethod
    async def get_by_id(db: AsyncSession, member_id: UUID) -> Optional[Member]:
        """
        Get member by ID.

        Args:
            db: Database session
            member_id: Member UUID

        Returns:
            Member if found, None otherwise
        """
        result = await db.execute(select(Member).where(Member.id == member_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_household_members(db: AsyncSession, household_id: UUID) -> List[Member]:
        """
        Get the roster of a household.

        Args:
            db: Database session
            household_id: Household UUID

        Returns:
            Members ordered by name
        """
        result = await db.execute(
            select(Member)
            .where(Member.household_id == household_id)
            .order_by(Member.full_name, Member.email)
        )
        return list(result.scalars().all())
