"""Split calculation strategies"""

from household_ledger.core.exceptions import ValidationError
from household_ledger.models.expense import SplitType
from household_ledger.services.split_strategies.base import (BaseSplitStrategy,
                                                             MemberSplit)
from household_ledger.services.split_strategies.custom_split import \
    CustomSplitStrategy
from household_ledger.services.split_strategies.equal_split import \
    EqualSplitStrategy


def get_split_strategy(split_type: SplitType) -> BaseSplitStrategy:
    """
    Get appropriate split strategy based on split type.

    Args:
        split_type: Type of split (equal or custom)

    Returns:
        Instance of appropriate strategy

    Raises:
        ValidationError: If split_type is not recognized
    """
    strategies = {
        SplitType.EQUAL: EqualSplitStrategy(),
        SplitType.CUSTOM: CustomSplitStrategy(),
    }

    strategy = strategies.get(split_type)
    if strategy is None:
        raise ValidationError(f"Unknown split type: {split_type}")

    return strategy


__all__ = [
    "BaseSplitStrategy",
    "MemberSplit",
    "EqualSplitStrategy",
    "CustomSplitStrategy",
    "get_split_strategy",
]
