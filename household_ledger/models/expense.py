"""Expense model"""
import enum
import uuid
from datetime import datetime

from sqlalchemy import (CheckConstraint, Column, Date, DateTime, Enum,
                        ForeignKey, Numeric, String)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from household_ledger.database import Base


class SplitType(str, enum.Enum):
    """Enum for split types"""
    EQUAL = "equal"
    CUSTOM = "custom"


class ExpenseCategory(str, enum.Enum):
    """Enum for expense categories"""
    GROCERIES = "groceries"
    UTILITIES = "utilities"
    HOUSEHOLD = "household"
    FOOD = "food"
    TRANSPORTATION = "transportation"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


class Expense(Base):
    """Expense model for a cost shared within a household"""

    __tablename__ = "expenses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    household_id = Column(UUID(as_uuid=True), ForeignKey("households.id"), nullable=False, index=True)
    description = Column(String(200), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    paid_by = Column(UUID(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    category = Column(
        Enum(ExpenseCategory, values_callable=lambda e: [m.value for m in e]),
        default=ExpenseCategory.OTHER,
        nullable=False,
    )
    split_type = Column(
        Enum(SplitType, values_callable=lambda e: [m.value for m in e]),
        default=SplitType.EQUAL,
        nullable=False,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_expense_amount_positive'),
    )

    # Relationships
    household = relationship("Household", back_populates="expenses")
    payer = relationship("Member", foreign_keys=[paid_by])
    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, description={self.description}, amount={self.amount})>"
