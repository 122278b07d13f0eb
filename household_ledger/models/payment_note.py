"""Payment note model"""
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from household_ledger.database import Base


class PaymentNote(Base):
    """Record of a settlement between two members. Insert-only."""

    __tablename__ = "payment_notes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    household_id = Column(UUID(as_uuid=True), ForeignKey("households.id"), nullable=False, index=True)
    from_user_id = Column(UUID(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    to_user_id = Column(UUID(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_payment_amount_positive'),
        CheckConstraint('from_user_id <> to_user_id', name='check_payment_not_self'),
    )

    # Relationships
    from_user = relationship("Member", foreign_keys=[from_user_id])
    to_user = relationship("Member", foreign_keys=[to_user_id])

    def __repr__(self) -> str:
        return f"<PaymentNote(from={self.from_user_id}, to={self.to_user_id}, amount={self.amount})>"
