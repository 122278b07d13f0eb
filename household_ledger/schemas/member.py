"""Member schemas"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

UNKNOWN_MEMBER_NAME = "Unknown member"


class MemberSummary(BaseModel):
    """Member identity as shown alongside balances and settlements"""

    id: UUID
    full_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    payment_link: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def stub(cls, member_id: UUID) -> "MemberSummary":
        """Placeholder for an id missing from the household roster"""
        return cls(id=member_id, full_name=UNKNOWN_MEMBER_NAME)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or UNKNOWN_MEMBER_NAME
