"""Payment note data access"""
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.models.payment_note import PaymentNote


class PaymentNoteRepository:
    """Repository for PaymentNote database operations. Notes are never updated."""

    @staticmethod
    async def create(db: AsyncSession, note: PaymentNote) -> PaymentNote:
        """
        Insert a payment note.

        Args:
            db: Database session
            note: PaymentNote object to create

        Returns:
            Created note
        """
        db.add(note)
        await db.flush()
        await db.refresh(note)
        return note

    @staticmethod
    async def get_household_notes(db: AsyncSession, household_id: UUID) -> List[PaymentNote]:
        """
        Get payment notes of a household, newest first.

        Args:
            db: Database session
            household_id: Household UUID

        Returns:
            List of payment notes
        """
        result = await db.execute(
            select(PaymentNote)
            .where(PaymentNote.household_id == household_id)
            .order_by(PaymentNote.created_at.desc())
        )
        return list(result.scalars().all())
