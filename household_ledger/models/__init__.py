"""SQLAlchemy models"""
from household_ledger.models.household import Household
from household_ledger.models.member import Member
from household_ledger.models.expense import Expense, ExpenseCategory, SplitType
from household_ledger.models.expense_split import ExpenseSplit
from household_ledger.models.payment_note import PaymentNote

__all__ = [
    "Household",
    "Member",
    "Expense",
    "ExpenseCategory",
    "ExpenseSplit",
    "PaymentNote",
    "SplitType",
]
