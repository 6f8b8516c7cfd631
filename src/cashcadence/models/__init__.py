"""SQLModel table exports."""

from .recurring import RecurringTransaction
from .savings import SavingsDeposit, SavingsGoal
from .transaction import Expense, Income

__all__ = [
    "Expense",
    "Income",
    "RecurringTransaction",
    "SavingsDeposit",
    "SavingsGoal",
]
