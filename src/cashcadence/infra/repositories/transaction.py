"""SQLModel implementation of the income/expense repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Type, TypeVar

from sqlmodel import Session, select

from ...models.transaction import Expense, Income
from ...services.recurring import RecurringOccurrenceDeletionError, is_occurrence_id

RecordT = TypeVar("RecordT", Income, Expense)


class SQLModelTransactionRepository:
    """SQLModel-based repository for hand-entered incomes and expenses."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _list(
        self,
        model: Type[RecordT],
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> list[RecordT]:
        with self.session_factory() as session:
            statement = select(model)
            if start_date:
                statement = statement.where(model.occurred_on >= start_date)
            if end_date:
                statement = statement.where(model.occurred_on <= end_date)
            statement = statement.order_by(model.occurred_on, model.id)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def _add(self, record: RecordT) -> RecordT:
        if is_occurrence_id(record.id) or record.is_recurring:
            raise ValueError("Recurring occurrences are derived from templates and cannot be stored.")
        with self.session_factory() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def _delete(self, model: Type[RecordT], record_id: str) -> None:
        if is_occurrence_id(record_id):
            raise RecurringOccurrenceDeletionError(
                f"{record_id} is a recurring occurrence; pause or delete its template instead."
            )
        with self.session_factory() as session:
            obj = session.get(model, record_id)
            if obj is None:
                raise KeyError(record_id)
            session.delete(obj)
            session.commit()

    def list_incomes(
        self, *, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Income]:
        """List incomes ordered by date."""
        return self._list(Income, start_date, end_date)

    def list_expenses(
        self, *, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Expense]:
        """List expenses ordered by date."""
        return self._list(Expense, start_date, end_date)

    def add_income(self, income: Income) -> Income:
        return self._add(income)

    def add_expense(self, expense: Expense) -> Expense:
        return self._add(expense)

    def delete_income(self, income_id: str) -> None:
        self._delete(Income, income_id)

    def delete_expense(self, expense_id: str) -> None:
        self._delete(Expense, expense_id)
