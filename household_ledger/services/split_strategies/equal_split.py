"""Equal split strategy"""

from decimal import Decimal
from typing import List, Sequence
from uuid import UUID

from household_ledger.services.split_strategies.base import (BaseSplitStrategy,
                                                             MemberSplit)
from household_ledger.utils.decimal_utils import round_decimal, sum_decimals


class EqualSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense equally among all household members"""

    def calculate_splits(
        self, total_amount: Decimal, member_ids: Sequence[UUID], custom_amounts: Sequence = ()
    ) -> List[MemberSplit]:
        """
        Calculate equal split for all members.

        Args:
            total_amount: Total expense amount
            member_ids: Members sharing the expense
            custom_amounts: Ignored

        Returns:
            List of MemberSplit with equal amounts
        """
        num_members = len(member_ids)

        if num_members == 0:
            return []

        rounded_base = round_decimal(total_amount / num_members)

        splits = [
            MemberSplit(user_id=member_id, amount_owed=rounded_base)
            for member_id in member_ids
        ]

        # Handle rounding - adjust last member to ensure total matches
        difference = total_amount - sum_decimals(split.amount_owed for split in splits)
        if difference != 0:
            splits[-1].amount_owed += difference

        return splits
