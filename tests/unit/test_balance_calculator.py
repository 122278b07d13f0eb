"""Unit tests for net balance calculation"""

import itertools
from decimal import Decimal
from uuid import uuid4

import pytest

from household_ledger.core.exceptions import DataIntegrityWarning
from household_ledger.schemas.member import UNKNOWN_MEMBER_NAME
from household_ledger.services.balance_calculator import (
    calculate_balances, calculate_member_positions)


class TestCalculateBalancesScenarios:
    """Concrete scenarios"""

    def test_empty_splits(self, members):
        """No splits means no balances"""
        assert calculate_balances([], members) == []

    def test_single_split(self, make_split, members, user1, user2):
        """user2 owes user1 50 for a 100 expense paid by user1"""
        splits = [make_split(user2.id, user1.id, "50.00", total="100.00")]

        result = calculate_balances(splits, members)

        assert len(result) == 1
        assert result[0].from_user.id == user2.id
        assert result[0].to_user.id == user1.id
        assert result[0].amount == Decimal("50.00")
        assert result[0].related_splits == splits

    def test_reciprocal_debts_are_netted(self, make_split, members, user1, user2):
        """50 one way and 30 back nets to a single 20"""
        splits = [
            make_split(user2.id, user1.id, "50.00", description="Expense A"),
            make_split(user1.id, user2.id, "30.00", description="Expense B"),
        ]

        result = calculate_balances(splits, members)

        assert len(result) == 1
        assert result[0].from_user.id == user2.id
        assert result[0].to_user.id == user1.id
        assert result[0].amount == Decimal("20.00")
        # Both directions were netted into the figure
        assert [s.id for s in result[0].related_splits] == [s.id for s in splits]

    def test_reciprocal_debts_flip_direction(self, make_split, members, user1, user2):
        """The larger reverse debt decides the direction"""
        splits = [
            make_split(user2.id, user1.id, "30.00"),
            make_split(user1.id, user2.id, "45.50"),
        ]

        result = calculate_balances(splits, members)

        assert len(result) == 1
        assert result[0].from_user.id == user1.id
        assert result[0].to_user.id == user2.id
        assert result[0].amount == Decimal("15.50")

    def test_exactly_offsetting_debts_emit_nothing(self, make_split, members, user1, user2):
        """Equal debts both ways cancel out"""
        splits = [
            make_split(user2.id, user1.id, "40.00"),
            make_split(user1.id, user2.id, "40.00"),
        ]

        assert calculate_balances(splits, members) == []

    def test_self_paid_split_ignored(self, make_split, members, user1):
        """A member paying for their own share owes nobody"""
        splits = [make_split(user1.id, user1.id, "100.00")]

        assert calculate_balances(splits, members) == []

    def test_settled_split_ignored(self, make_split, members, user1, user2):
        """Settled splits never produce a balance"""
        splits = [make_split(user2.id, user1.id, "50.00", is_settled=True)]

        assert calculate_balances(splits, members) == []

    def test_sub_cent_balance_suppressed(self, make_split, members, user1, user2):
        """Half a cent is noise, not a debt"""
        splits = [make_split(user2.id, user1.id, "0.005")]

        assert calculate_balances(splits, members) == []

    def test_sub_cent_net_suppressed(self, make_split, members, user1, user2):
        """A net difference below one cent is treated as settled"""
        splits = [
            make_split(user2.id, user1.id, "33.334"),
            make_split(user1.id, user2.id, "33.33"),
        ]

        assert calculate_balances(splits, members) == []

    def test_amount_rounded_to_cents(self, make_split, members, user1, user2):
        """Emitted amounts carry two decimal places"""
        splits = [
            make_split(user2.id, user1.id, "33.333"),
            make_split(user2.id, user1.id, "33.333"),
        ]

        result = calculate_balances(splits, members)

        assert result[0].amount == Decimal("66.67")

    def test_multiple_splits_accumulate(self, make_split, members, user1, user2, user3):
        """Debts to the same creditor add up; other pairs stay separate"""
        splits = [
            make_split(user1.id, user2.id, "100.00", description="Groceries"),
            make_split(user1.id, user2.id, "50.00", description="Utilities"),
            make_split(user3.id, user1.id, "75.00", description="Internet"),
        ]

        result = calculate_balances(splits, members)

        assert len(result) == 2
        assert (result[0].from_user.id, result[0].to_user.id) == (user1.id, user2.id)
        assert result[0].amount == Decimal("150.00")
        assert [s.expense.description for s in result[0].related_splits] == [
            "Groceries",
            "Utilities",
        ]
        assert (result[1].from_user.id, result[1].to_user.id) == (user3.id, user1.id)
        assert result[1].amount == Decimal("75.00")

    def test_sorted_by_amount_descending(self, make_split, members, user1, user2, user3):
        """Largest balance first"""
        splits = [
            make_split(user3.id, user1.id, "10.00"),
            make_split(user2.id, user1.id, "90.00"),
            make_split(user3.id, user2.id, "40.00"),
        ]

        amounts = [b.amount for b in calculate_balances(splits, members)]

        assert amounts == [Decimal("90.00"), Decimal("40.00"), Decimal("10.00")]


class TestMemberResolution:
    """Roster lookups"""

    def test_members_resolved_from_roster(self, make_split, members, user1, user2):
        """Balances carry the full member records"""
        result = calculate_balances([make_split(user2.id, user1.id, "20.00")], members)

        assert result[0].from_user.full_name == "Jane Smith"
        assert result[0].to_user.full_name == "John Doe"
        assert result[0].to_user.email == "john@example.com"

    def test_payment_link_is_creditors(self, make_split, members, user1, user2):
        """The payment link points at whoever is owed"""
        result = calculate_balances([make_split(user2.id, user1.id, "20.00")], members)

        assert result[0].payment_link == "https://pay.example.com/john"

    def test_unknown_member_falls_back_to_stub(self, make_split, members, user1):
        """An id outside the roster still produces a balance"""
        stranger = uuid4()

        result = calculate_balances([make_split(stranger, user1.id, "20.00")], members)

        assert len(result) == 1
        assert result[0].from_user.id == stranger
        assert result[0].from_user.full_name == UNKNOWN_MEMBER_NAME

    def test_roster_of_mappings(self, make_split, user1, user2):
        """Plain dict rosters resolve like ORM members"""
        roster = [
            {"id": user1.id, "full_name": "John Doe", "payment_link": "https://pay.example.com/john"},
            {"id": user2.id, "full_name": "Jane Smith"},
        ]

        result = calculate_balances([make_split(user2.id, user1.id, "20.00")], roster)

        assert result[0].from_user.full_name == "Jane Smith"
        assert result[0].to_user.full_name == "John Doe"
        assert result[0].payment_link == "https://pay.example.com/john"

        positions = calculate_member_positions([make_split(user2.id, user1.id, "20.00")], roster)

        assert {p.member.full_name for p in positions} == {"John Doe", "Jane Smith"}

    def test_empty_roster(self, make_split, user1, user2):
        """Works without any roster at all"""
        result = calculate_balances([make_split(user2.id, user1.id, "20.00")], [])

        assert result[0].to_user.id == user1.id
        assert result[0].payment_link is None


class TestMalformedInput:
    """Degrade gracefully on bad rows"""

    def test_split_without_expense_skipped(self, make_split, members, user1, user2):
        """A split missing its parent expense is skipped with a warning"""
        splits = [
            make_split(user2.id, user1.id, "50.00", with_expense=False),
            make_split(user2.id, user1.id, "25.00"),
        ]

        with pytest.warns(DataIntegrityWarning):
            result = calculate_balances(splits, members)

        assert len(result) == 1
        assert result[0].amount == Decimal("25.00")
        assert len(result[0].related_splits) == 1

    def test_expense_without_payer_skipped(self, make_split, members, user2):
        """A parent expense with no payer cannot create a debt"""
        splits = [make_split(user2.id, None, "50.00")]

        with pytest.warns(DataIntegrityWarning):
            assert calculate_balances(splits, members) == []

    def test_non_sequence_rejected(self, members):
        """A wrongly shaped call fails loudly"""
        with pytest.raises(TypeError):
            calculate_balances(None, members)

        with pytest.raises(TypeError):
            calculate_balances("splits", members)


class TestBalanceProperties:
    """Invariants over a range of split sets"""

    @pytest.fixture
    def split_sets(self, make_split, user1, user2, user3):
        ids = [user1.id, user2.id, user3.id]
        amounts = ["0.004", "12.50", "30.00", "45.25"]
        sets = []
        for debtor, payer, amount, settled in itertools.product(
            ids, ids, amounts, (False, True)
        ):
            base = [
                make_split(debtor, payer, amount, is_settled=settled),
                make_split(payer, debtor, "30.00"),
                make_split(ids[0], ids[2], "7.77"),
            ]
            sets.append(base)
        return sets

    def test_amounts_positive_and_no_self_balances(self, split_sets, members):
        """Every balance is a positive debt between two different members"""
        for splits in split_sets:
            for balance in calculate_balances(splits, members):
                assert balance.amount > 0
                assert balance.from_user.id != balance.to_user.id

    def test_at_most_one_balance_per_pair(self, split_sets, members):
        """No unordered pair appears twice"""
        for splits in split_sets:
            pairs = [
                frozenset((b.from_user.id, b.to_user.id))
                for b in calculate_balances(splits, members)
            ]
            assert len(pairs) == len(set(pairs))

    def test_settled_splits_do_not_matter(self, split_sets, members):
        """Dropping settled splits leaves the result unchanged"""
        for splits in split_sets:
            unsettled = [s for s in splits if not s.is_settled]
            assert calculate_balances(splits, members) == calculate_balances(unsettled, members)

    def test_self_paid_splits_do_not_matter(self, split_sets, members, make_split, user1):
        """Adding a self-paid split leaves the result unchanged"""
        for splits in split_sets:
            with_self = splits + [make_split(user1.id, user1.id, "99.00")]
            assert calculate_balances(with_self, members) == calculate_balances(splits, members)

    def test_repeatable(self, split_sets, members):
        """Same input, same output"""
        for splits in split_sets:
            assert calculate_balances(splits, members) == calculate_balances(splits, members)

    def test_money_conserved(self, split_sets, members):
        """Each member's net across balances matches their raw split totals"""
        tolerance = Decimal("0.03")  # one cent of rounding per pair
        for splits in split_sets:
            raw = {}
            for s in splits:
                payer = s.expense.paid_by
                if s.is_settled or s.user_id == payer:
                    continue
                raw[s.user_id] = raw.get(s.user_id, Decimal("0")) - s.amount_owed
                raw[payer] = raw.get(payer, Decimal("0")) + s.amount_owed

            netted = {}
            for b in calculate_balances(splits, members):
                netted[b.from_user.id] = netted.get(b.from_user.id, Decimal("0")) - b.amount
                netted[b.to_user.id] = netted.get(b.to_user.id, Decimal("0")) + b.amount

            for member_id in set(raw) | set(netted):
                diff = raw.get(member_id, Decimal("0")) - netted.get(member_id, Decimal("0"))
                assert abs(diff) <= tolerance


class TestCalculateMemberPositions:
    """Per-member household positions"""

    def test_positions(self, make_split, members, user1, user2, user3):
        """Creditors are owed, debtors owe, zero positions are dropped"""
        splits = [
            make_split(user2.id, user1.id, "50.00"),
            make_split(user3.id, user1.id, "25.00"),
            make_split(user1.id, user1.id, "25.00"),
        ]

        positions = {p.member.id: p for p in calculate_member_positions(splits, members)}

        assert positions[user1.id].type == "owed"
        assert positions[user1.id].amount == Decimal("75.00")
        assert positions[user2.id].type == "owes"
        assert positions[user2.id].amount == Decimal("50.00")
        assert positions[user3.id].amount == Decimal("25.00")

    def test_balanced_member_dropped(self, make_split, members, user1, user2, user3):
        """A member whose debts and credits cancel is not listed"""
        splits = [
            make_split(user2.id, user1.id, "50.00"),
            make_split(user3.id, user2.id, "50.00"),
        ]

        positions = calculate_member_positions(splits, members)

        assert user2.id not in {p.member.id for p in positions}

    def test_settled_ignored(self, make_split, members, user1, user2):
        """Settled splits do not move positions"""
        splits = [make_split(user2.id, user1.id, "50.00", is_settled=True)]

        assert calculate_member_positions(splits, members) == []
