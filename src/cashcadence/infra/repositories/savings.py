"""SQLModel implementation of the savings goal repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.savings import SavingsGoal


class SQLModelSavingsGoalRepository:
    """Stores goals with their deposits; deleting a goal removes its deposits."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_goals(self) -> list[SavingsGoal]:
        with self.session_factory() as session:
            statement = (
                select(SavingsGoal)
                .options(selectinload(SavingsGoal.deposits))  # type: ignore[arg-type]
                .order_by(SavingsGoal.created_at, SavingsGoal.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, goal_id: str) -> Optional[SavingsGoal]:
        with self.session_factory() as session:
            statement = (
                select(SavingsGoal)
                .where(SavingsGoal.id == goal_id)
                .options(selectinload(SavingsGoal.deposits))  # type: ignore[arg-type]
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge_all()
            return obj

    def save(self, goal: SavingsGoal) -> SavingsGoal:
        """Merge ``goal`` and its deposits by primary key."""
        with self.session_factory() as session:
            session.merge(goal)
            session.commit()
        stored = self.get_by_id(goal.id)
        if stored is None:  # pragma: no cover - merge just wrote it
            raise KeyError(goal.id)
        return stored

    def delete(self, goal_id: str) -> None:
        with self.session_factory() as session:
            obj = session.get(SavingsGoal, goal_id)
            if obj is None:
                raise KeyError(goal_id)
            session.delete(obj)
            session.commit()
