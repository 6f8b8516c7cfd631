"""Repository protocol definitions for domain layer."""

from .recurring import RecurringRepository
from .savings import SavingsGoalRepository
from .transaction import TransactionRepository

__all__ = [
    "RecurringRepository",
    "SavingsGoalRepository",
    "TransactionRepository",
]
