"""Transaction repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.transaction import Expense, Income


class TransactionRepository(Protocol):
    """Repository for hand-entered incomes and expenses."""

    def list_incomes(
        self, *, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Income]:
        """List incomes, optionally within an inclusive date range."""
        ...

    def list_expenses(
        self, *, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Expense]:
        """List expenses, optionally within an inclusive date range."""
        ...

    def add_income(self, income: Income) -> Income:
        ...

    def add_expense(self, expense: Expense) -> Expense:
        ...

    def delete_income(self, income_id: str) -> None:
        ...

    def delete_expense(self, expense_id: str) -> None:
        ...
