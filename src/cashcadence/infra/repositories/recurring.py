"""SQLModel implementation of the recurring template repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.recurring import RecurringTransaction
from ...services.recurring import validate_template


class SQLModelRecurringRepository:
    """SQLModel-based recurring template repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self, *, include_paused: bool = True) -> list[RecurringTransaction]:
        """List templates ordered by start date."""
        with self.session_factory() as session:
            statement = select(RecurringTransaction)
            if not include_paused:
                statement = statement.where(RecurringTransaction.is_paused == False)  # noqa: E712
            statement = statement.order_by(RecurringTransaction.start_date, RecurringTransaction.id)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, template_id: str) -> Optional[RecurringTransaction]:
        with self.session_factory() as session:
            obj = session.get(RecurringTransaction, template_id)
            if obj:
                session.expunge(obj)
            return obj

    def create(self, template: RecurringTransaction) -> RecurringTransaction:
        validate_template(template)
        with self.session_factory() as session:
            session.add(template)
            session.commit()
            session.refresh(template)
            session.expunge(template)
            return template

    def update(self, template: RecurringTransaction) -> RecurringTransaction:
        validate_template(template)
        with self.session_factory() as session:
            if session.get(RecurringTransaction, template.id) is None:
                raise KeyError(template.id)
            merged = session.merge(template)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def set_paused(self, template_id: str, paused: bool) -> RecurringTransaction:
        with self.session_factory() as session:
            obj = session.get(RecurringTransaction, template_id)
            if obj is None:
                raise KeyError(template_id)
            obj.is_paused = paused
            session.add(obj)
            session.commit()
            session.refresh(obj)
            session.expunge(obj)
            return obj

    def delete(self, template_id: str) -> None:
        with self.session_factory() as session:
            obj = session.get(RecurringTransaction, template_id)
            if obj is None:
                raise KeyError(template_id)
            session.delete(obj)
            session.commit()
