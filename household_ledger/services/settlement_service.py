"""Settlement recording"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.core.exceptions import (AuthorizationError, ConflictError,
                                              NotFoundError, PersistenceError,
                                              ValidationError)
from household_ledger.models.payment_note import PaymentNote
from household_ledger.repositories.member_repository import MemberRepository
from household_ledger.repositories.payment_note_repository import \
    PaymentNoteRepository
from household_ledger.repositories.split_repository import SplitRepository
from household_ledger.schemas.balance import Balance
from household_ledger.schemas.member import MemberSummary
from household_ledger.schemas.settlement import CompletedSettlement
from household_ledger.services.balance_service import BalanceService
from household_ledger.utils.decimal_utils import to_decimal

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for settling balances between members"""

    @staticmethod
    def validate_amount(balance: Balance, amount: Decimal) -> None:
        """
        Check a payment against the outstanding balance.

        Args:
            balance: Balance being settled
            amount: Payment amount

        Raises:
            ValidationError: If amount is not in (0, balance.amount] or the
                balance has no splits
        """
        if not amount.is_finite() or amount <= 0 or amount > balance.amount:
            raise ValidationError(
                f"Invalid payment amount: must be greater than 0 and at most {balance.amount}",
                details={"max_amount": str(balance.amount)},
            )

        if not balance.related_splits:
            raise ValidationError("No outstanding splits to settle for this balance")

    @staticmethod
    def select_splits_to_settle(balance: Balance, amount: Decimal) -> List[UUID]:
        """
        Decide which splits a payment closes.

        A full payment closes every related split, both directions. A partial
        payment closes the debtor's splits in the order supplied while each
        one still fits in what is left of the payment, stopping at the first
        that does not. Splits are never closed partially.

        Args:
            balance: Balance being settled
            amount: Payment amount, already validated

        Returns:
            IDs of splits to mark settled
        """
        if amount == balance.amount:
            return [split.id for split in balance.related_splits]

        selected: List[UUID] = []
        remaining = amount
        for split in balance.related_splits:
            if split.user_id != balance.from_user.id:
                continue
            if split.amount_owed > remaining:
                break
            selected.append(split.id)
            remaining -= split.amount_owed
        return selected

    @staticmethod
    async def settle_payment(
        balance: Balance,
        amount: Union[Decimal, int, float, str],
        note: Optional[str],
        household_id: UUID,
        db: AsyncSession,
    ) -> PaymentNote:
        """
        Apply a payment to a balance.

        Split updates and the payment note are written in one transaction;
        the note is only inserted after the split update succeeded.

        Args:
            balance: Balance being settled
            amount: Payment amount
            note: Optional free-text note
            household_id: Household the balance belongs to
            db: Database session

        Returns:
            The stored payment note

        Raises:
            ValidationError: Invalid amount or nothing to settle (no writes made)
            ConflictError: A selected split was settled by someone else meanwhile
            PersistenceError: The store rejected a write
        """
        try:
            amount = to_decimal(amount)
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"Invalid payment amount: {amount!r} is not a number")
        SettlementService.validate_amount(balance, amount)

        split_ids = SettlementService.select_splits_to_settle(balance, amount)

        try:
            async with db.begin_nested():
                if split_ids:
                    updated = await SplitRepository.mark_settled(db, split_ids)
                    if updated != len(split_ids):
                        raise ConflictError(
                            "Some of these expenses were already settled. Refresh and try again."
                        )

                payment_note = await PaymentNoteRepository.create(
                    db,
                    PaymentNote(
                        household_id=household_id,
                        from_user_id=balance.from_user.id,
                        to_user_id=balance.to_user.id,
                        amount=amount,
                        note=note,
                    ),
                )

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception(
                "Failed to record payment of %s from %s to %s",
                amount, balance.from_user.id, balance.to_user.id,
            )
            raise PersistenceError() from e

        logger.info(
            "Recorded payment %s of %s from %s to %s, settled %d splits",
            payment_note.id, amount, balance.from_user.id, balance.to_user.id, len(split_ids),
        )
        return payment_note

    @staticmethod
    async def settle_between(
        household_id: UUID,
        acting_user_id: UUID,
        from_user_id: UUID,
        to_user_id: UUID,
        amount: Decimal,
        note: Optional[str],
        db: AsyncSession,
    ) -> PaymentNote:
        """
        Settle the current balance from one member to another.

        The balance is recomputed from the store so the amount is validated
        against what is actually outstanding.

        Raises:
            AuthorizationError: If the acting member is not one of the two parties
            NotFoundError: If there is no outstanding balance in that direction
        """
        if acting_user_id not in (from_user_id, to_user_id):
            raise AuthorizationError("Only the payer or the recipient can record a payment")

        balances = await BalanceService.calculate_household_balances(household_id, db)
        balance = next(
            (
                b for b in balances
                if b.from_user.id == from_user_id and b.to_user.id == to_user_id
            ),
            None,
        )
        if balance is None:
            raise NotFoundError("No outstanding balance between these members")

        payment_note = await SettlementService.settle_payment(
            balance, amount, note, household_id, db
        )
        await BalanceService.invalidate_household(household_id)
        return payment_note

    @staticmethod
    async def get_completed_settlements(
        household_id: UUID, db: AsyncSession
    ) -> List[CompletedSettlement]:
        """
        Get settlement history of a household, newest first.

        Args:
            household_id: Household ID
            db: Database session

        Returns:
            List of CompletedSettlement objects
        """
        notes = await PaymentNoteRepository.get_household_notes(db, household_id)
        members = await MemberRepository.get_household_members(db, household_id)
        roster = {member.id: MemberSummary.model_validate(member) for member in members}

        return [
            CompletedSettlement(
                id=note.id,
                from_user=roster.get(note.from_user_id) or MemberSummary.stub(note.from_user_id),
                to_user=roster.get(note.to_user_id) or MemberSummary.stub(note.to_user_id),
                amount=note.amount,
                description=note.note or "Payment",
                note=note.note,
                date=note.created_at,
            )
            for note in notes
        ]
