"""Household balance queries"""

import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.repositories.member_repository import MemberRepository
from household_ledger.repositories.split_repository import SplitRepository
from household_ledger.schemas.balance import Balance, BalanceSummary, MemberPosition
from household_ledger.schemas.split import SplitRecord
from household_ledger.services.balance_calculator import (
    calculate_balances, calculate_member_positions)
from household_ledger.services.cache_service import CacheService
from household_ledger.utils.decimal_utils import round_decimal

logger = logging.getLogger(__name__)

BALANCES_VIEW = "balances"
POSITIONS_VIEW = "positions"

_balance_list = TypeAdapter(List[Balance])
_position_list = TypeAdapter(List[MemberPosition])


class BalanceService:
    """Service for balance calculation operations"""

    @staticmethod
    def _serialize_balances(balances: List[Balance]) -> str:
        """
        Serialize balances to JSON.

        Args:
            balances: Balance list

        Returns:
            JSON string
        """
        return _balance_list.dump_json(balances).decode("utf-8")

    @staticmethod
    def _deserialize_balances(json_str: str) -> List[Balance]:
        """
        Deserialize balances from JSON.

        Args:
            json_str: JSON string

        Returns:
            Balance list
        """
        return _balance_list.validate_json(json_str)

    @staticmethod
    async def _load_splits(household_id: UUID, db: AsyncSession) -> List[SplitRecord]:
        """Fetch unsettled splits of the household as calculator input"""
        rows = await SplitRepository.get_unsettled_for_household(db, household_id)
        return [SplitRecord.model_validate(row) for row in rows]

    @staticmethod
    async def calculate_household_balances(
        household_id: UUID, db: AsyncSession
    ) -> List[Balance]:
        """
        Calculate balances straight from the store, bypassing the cache.

        Args:
            household_id: Household ID
            db: Database session

        Returns:
            Balance list
        """
        splits = await BalanceService._load_splits(household_id, db)
        members = await MemberRepository.get_household_members(db, household_id)
        return calculate_balances(splits, members)

    @staticmethod
    async def get_household_balances(
        household_id: UUID, db: AsyncSession, use_cache: bool = True
    ) -> List[Balance]:
        """
        Get all balances of a household.

        Args:
            household_id: Household ID
            db: Database session
            use_cache: Whether to use cache (default: True)

        Returns:
            List of Balance objects
        """
        if not use_cache:
            return await BalanceService.calculate_household_balances(household_id, db)

        cached_data = await CacheService.read_view(household_id, BALANCES_VIEW)

        if cached_data:
            try:
                return BalanceService._deserialize_balances(cached_data)
            except PydanticValidationError:
                logger.warning("Discarding unreadable cached balances for %s", household_id)

        balances = await BalanceService.calculate_household_balances(household_id, db)
        await CacheService.write_view(
            household_id, BALANCES_VIEW, BalanceService._serialize_balances(balances)
        )
        return balances

    @staticmethod
    async def get_balance_summary(
        household_id: UUID, user_id: UUID, db: AsyncSession, use_cache: bool = True
    ) -> BalanceSummary:
        """
        Get balance summary for one member.

        Args:
            household_id: Household ID
            user_id: Member ID
            db: Database session
            use_cache: Whether to use cache (default: True)

        Returns:
            BalanceSummary object
        """
        balances = await BalanceService.get_household_balances(household_id, db, use_cache)

        total_owed_to_you = Decimal("0")
        total_you_owe = Decimal("0")
        num_people_owe_you = 0
        num_people_you_owe = 0

        for balance in balances:
            if balance.to_user.id == user_id:
                total_owed_to_you += balance.amount
                num_people_owe_you += 1
            elif balance.from_user.id == user_id:
                total_you_owe += balance.amount
                num_people_you_owe += 1

        overall_balance = total_owed_to_you - total_you_owe

        return BalanceSummary(
            overall_balance=round_decimal(overall_balance),
            total_you_owe=round_decimal(total_you_owe),
            total_owed_to_you=round_decimal(total_owed_to_you),
            num_people_you_owe=num_people_you_owe,
            num_people_owe_you=num_people_owe_you,
        )

    @staticmethod
    async def get_member_positions(
        household_id: UUID, db: AsyncSession, use_cache: bool = True
    ) -> List[MemberPosition]:
        """
        Get each member's net position in the household.

        Args:
            household_id: Household ID
            db: Database session
            use_cache: Whether to use cache (default: True)

        Returns:
            List of MemberPosition objects
        """
        if use_cache:
            cached_data = await CacheService.read_view(household_id, POSITIONS_VIEW)
            if cached_data:
                try:
                    return _position_list.validate_json(cached_data)
                except PydanticValidationError:
                    logger.warning("Discarding unreadable cached positions for %s", household_id)

        splits = await BalanceService._load_splits(household_id, db)
        members = await MemberRepository.get_household_members(db, household_id)
        positions = calculate_member_positions(splits, members)

        if use_cache:
            await CacheService.write_view(
                household_id, POSITIONS_VIEW, _position_list.dump_json(positions).decode("utf-8")
            )
        return positions

    @staticmethod
    async def invalidate_household(household_id: UUID) -> int:
        """
        Drop every cached view of a household after its ledger changed.

        Args:
            household_id: Household ID

        Returns:
            Number of cache entries removed
        """
        removed = await CacheService.invalidate_household(household_id)
        logger.debug("Invalidated %d cached views of household %s", removed, household_id)
        return removed
