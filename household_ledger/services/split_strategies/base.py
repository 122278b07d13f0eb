"""Base strategy interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Sequence
from uuid import UUID

from pydantic import BaseModel


class MemberSplit(BaseModel):
    """Result of split calculation for a member"""

    user_id: UUID
    amount_owed: Decimal


class BaseSplitStrategy(ABC):
    """Base class for split strategies"""

    @abstractmethod
    def calculate_splits(
        self, total_amount: Decimal, member_ids: Sequence[UUID], custom_amounts: Sequence = ()
    ) -> List[MemberSplit]:
        """
        Calculate split amounts for members.

        Args:
            total_amount: Total expense amount
            member_ids: Household members sharing the expense
            custom_amounts: Per-member amounts, used by the custom strategy

        Returns:
            List of MemberSplit objects with user_id and amount_owed
        """
        pass
