"""Household member model"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from household_ledger.database import Base


class Member(Base):
    """A person belonging to a household"""

    __tablename__ = "members"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    household_id = Column(
        UUID(as_uuid=True), ForeignKey("households.id"), nullable=True, index=True
    )
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    avatar_url = Column(String(500), nullable=True)
    payment_link = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    household = relationship("Household", back_populates="members")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, full_name={self.full_name}, household_id={self.household_id})>"
