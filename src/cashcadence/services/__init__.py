"""Service module exports."""

from . import balances, insights, occurrences, recurring, savings

__all__ = [
    "balances",
    "insights",
    "occurrences",
    "recurring",
    "savings",
]
