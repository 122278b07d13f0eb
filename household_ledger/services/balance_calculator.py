"""Net balance calculation over expense splits"""

import logging
import warnings
from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal
from typing import (TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional,
                    Tuple, Union)
from uuid import UUID

from household_ledger.core.exceptions import DataIntegrityWarning
from household_ledger.schemas.balance import Balance, MemberPosition
from household_ledger.schemas.member import MemberSummary
from household_ledger.schemas.split import SplitRecord
from household_ledger.utils.decimal_utils import is_negligible, round_decimal

if TYPE_CHECKING:
    from household_ledger.models.member import Member

logger = logging.getLogger(__name__)

PairKey = Tuple[UUID, UUID]

# ORM rows, summaries or plain mappings with the MemberSummary fields
MemberLike = Union["Member", MemberSummary, Mapping[str, Any]]


def _pair_key(a: UUID, b: UUID) -> PairKey:
    """Order-independent key for a pair of members"""
    return (a, b) if str(a) <= str(b) else (b, a)


def _outstanding(splits: Iterable[SplitRecord]) -> Iterable[Tuple[SplitRecord, UUID]]:
    """
    Yield (split, payer_id) for every split that creates a cross-member debt.

    Settled splits, splits without a parent expense and self-paid splits are
    dropped here.
    """
    for split in splits:
        if split.is_settled:
            continue

        expense = split.expense
        if expense is None or expense.paid_by is None:
            message = f"Split {split.id} has no parent expense payer, skipping"
            logger.warning(message)
            warnings.warn(message, DataIntegrityWarning, stacklevel=3)
            continue

        if split.user_id == expense.paid_by:
            continue

        yield split, expense.paid_by


def _roster(members: Iterable[MemberLike]) -> Dict[UUID, MemberSummary]:
    summaries = (MemberSummary.model_validate(member) for member in members)
    return {summary.id: summary for summary in summaries}


def _resolve(roster: Dict[UUID, MemberSummary], member_id: UUID) -> MemberSummary:
    return roster.get(member_id) or MemberSummary.stub(member_id)


def calculate_balances(
    splits: Sequence[SplitRecord], members: Iterable[MemberLike]
) -> List[Balance]:
    """
    Reduce unsettled splits to at most one net balance per pair of members.

    Reciprocal debts between the same two members are netted; nets below one
    cent are dropped. Each balance carries every split netted into it, in the
    order supplied.

    Args:
        splits: Split rows with their parent expense embedded
        members: Household roster (ORM members, MemberSummary objects or mappings)

    Returns:
        Balances sorted by amount, largest first

    Raises:
        TypeError: If splits is not a sequence
    """
    if not isinstance(splits, Sequence) or isinstance(splits, (str, bytes)):
        raise TypeError("splits must be a sequence of SplitRecord")

    owed: Dict[PairKey, Decimal] = defaultdict(lambda: Decimal("0"))
    pair_splits: Dict[PairKey, List[SplitRecord]] = {}

    for split, payer_id in _outstanding(splits):
        owed[(split.user_id, payer_id)] += split.amount_owed
        pair_splits.setdefault(_pair_key(split.user_id, payer_id), []).append(split)

    roster = _roster(members)
    balances: List[Balance] = []

    for (a, b), related in pair_splits.items():
        net = owed.get((a, b), Decimal("0")) - owed.get((b, a), Decimal("0"))
        if is_negligible(net):
            continue

        debtor, creditor = (a, b) if net > 0 else (b, a)
        to_user = _resolve(roster, creditor)

        balances.append(
            Balance(
                from_user=_resolve(roster, debtor),
                to_user=to_user,
                amount=round_decimal(abs(net)),
                related_splits=list(related),
                payment_link=to_user.payment_link,
            )
        )

    balances.sort(key=lambda balance: balance.amount, reverse=True)
    return balances


def calculate_member_positions(
    splits: Sequence[SplitRecord], members: Iterable[MemberLike]
) -> List[MemberPosition]:
    """
    Net position of each member across the household.

    Positive totals mean the household owes the member ("owed"), negative
    mean the member owes ("owes"). Members with a zero position are left out.
    """
    totals: Dict[UUID, Decimal] = defaultdict(lambda: Decimal("0"))
    for split, payer_id in _outstanding(splits):
        totals[split.user_id] -= split.amount_owed
        totals[payer_id] += split.amount_owed

    roster = _roster(members)
    order: List[UUID] = list(roster)
    order.extend(member_id for member_id in totals if member_id not in roster)

    positions: List[MemberPosition] = []
    for member_id in order:
        total: Optional[Decimal] = totals.get(member_id)
        if total is None or is_negligible(total):
            continue
        positions.append(
            MemberPosition(
                member=_resolve(roster, member_id),
                amount=round_decimal(abs(total)),
                type="owed" if total > 0 else "owes",
            )
        )
    return positions
