"""Household model"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from household_ledger.database import Base


class Household(Base):
    """Household model, the scope for expenses and balances"""

    __tablename__ = "households"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    invite_code = Column(String(32), unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    members = relationship("Member", back_populates="household")
    expenses = relationship("Expense", back_populates="household", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name={self.name})>"
