"""Savings goal repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.savings import SavingsGoal


class SavingsGoalRepository(Protocol):
    """Repository for savings goals together with their deposits."""

    def list_goals(self) -> list[SavingsGoal]:
        ...

    def get_by_id(self, goal_id: str) -> Optional[SavingsGoal]:
        ...

    def save(self, goal: SavingsGoal) -> SavingsGoal:
        """Insert or replace a goal and its deposits."""
        ...

    def delete(self, goal_id: str) -> None:
        """Remove a goal and every deposit it owns."""
        ...
