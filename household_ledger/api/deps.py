"""Dependency injection (acting member, db)"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from household_ledger.core.exceptions import AuthenticationError, AuthorizationError
from household_ledger.database import get_db
from household_ledger.models.member import Member
from household_ledger.repositories.member_repository import MemberRepository


async def get_acting_member(
    household_id: UUID,
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db),
) -> Member:
    """
    Resolve the member on whose behalf the request is made.

    Identity is established upstream; this only checks the id names a
    member of the household in the path.

    Args:
        household_id: Household from the path
        x_user_id: Acting member id header
        db: Database session

    Returns:
        Acting member

    Raises:
        AuthenticationError: If the header is missing or names no member
        AuthorizationError: If the member belongs to another household
    """
    if not x_user_id:
        raise AuthenticationError("X-User-Id header is required")

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise AuthenticationError("X-User-Id header is not a valid id")

    member = await MemberRepository.get_by_id(db, user_id)
    if member is None:
        raise AuthenticationError()

    if member.household_id != household_id:
        raise AuthorizationError("You are not a member of this household")

    return member
