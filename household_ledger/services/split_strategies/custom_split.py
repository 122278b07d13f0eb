"""Custom split strategy"""
from decimal import Decimal
from typing import List, Sequence
from uuid import UUID

from household_ledger.core.exceptions import ValidationError
from household_ledger.services.split_strategies.base import BaseSplitStrategy, MemberSplit
from household_ledger.utils.decimal_utils import CENT, sum_decimals, to_decimal


class CustomSplitStrategy(BaseSplitStrategy):
    """Strategy for explicitly specified per-member amounts"""

    def calculate_splits(
        self, total_amount: Decimal, member_ids: Sequence[UUID], custom_amounts: Sequence = ()
    ) -> List[MemberSplit]:
        """
        Use the specified amounts for the selected members.

        Args:
            total_amount: Total expense amount
            member_ids: Household members allowed to take a share
            custom_amounts: Items with user_id and amount

        Returns:
            List of MemberSplit with specified amounts

        Raises:
            ValidationError: If a member is outside the household, listed
                twice, owes less than a cent, or amounts don't sum to total
        """
        if not custom_amounts:
            raise ValidationError("Custom splits are required for custom split type")

        allowed = set(member_ids)
        seen = set()
        splits = []
        for item in custom_amounts:
            if item.user_id not in allowed:
                raise ValidationError(f"User {item.user_id} is not a member of this household")
            if item.user_id in seen:
                raise ValidationError(f"User {item.user_id} appears more than once")
            seen.add(item.user_id)

            amount = to_decimal(item.amount)
            if amount < CENT:
                raise ValidationError(f"Amount must be greater than 0, got {amount}")

            splits.append(MemberSplit(user_id=item.user_id, amount_owed=amount))

        total_assigned = sum_decimals(split.amount_owed for split in splits)

        # Allow small rounding difference (0.01)
        if abs(total_amount - total_assigned) > CENT:
            raise ValidationError(
                f"Custom split amounts ({total_assigned}) must equal the total expense amount ({total_amount})"
            )

        return splits
