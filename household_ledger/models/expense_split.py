"""Expense split model"""
import uuid
from datetime import datetime

from sqlalchemy import (Boolean, CheckConstraint, Column, DateTime,
                        ForeignKey, Numeric, UniqueConstraint)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from household_ledger.database import Base


class ExpenseSplit(Base):
    """One member's owed portion of an expense"""

    __tablename__ = "expense_splits"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    expense_id = Column(UUID(as_uuid=True), ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    amount_owed = Column(Numeric(12, 2), nullable=False)
    is_settled = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint('expense_id', 'user_id', name='uq_expense_split_user'),
        CheckConstraint('amount_owed >= 0', name='check_amount_owed_non_negative'),
    )

    # Relationships
    expense = relationship("Expense", back_populates="splits")
    user = relationship("Member")

    def __repr__(self) -> str:
        return f"<ExpenseSplit(expense_id={self.expense_id}, user_id={self.user_id}, owed={self.amount_owed}, settled={self.is_settled})>"
