"""Concrete repository implementations using SQLModel."""

from .recurring import SQLModelRecurringRepository
from .savings import SQLModelSavingsGoalRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelRecurringRepository",
    "SQLModelSavingsGoalRepository",
    "SQLModelTransactionRepository",
]
