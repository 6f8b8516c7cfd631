"""Savings vault ledger: goals, deposits and the completion latch."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.savings import SavingsDeposit, SavingsGoal

logger = get_logger(__name__)


@dataclass(slots=True)
class DepositResult:
    """Outcome of a deposit; ``completed`` is set only on the crossing deposit."""

    goal: SavingsGoal
    deposit: SavingsDeposit
    completed: bool


@dataclass(slots=True)
class GoalProgress:
    percent: float
    remaining: float


def _new_id() -> str:
    return str(uuid.uuid4())


def _copy_deposit(deposit: SavingsDeposit, goal_id: str) -> SavingsDeposit:
    return SavingsDeposit(
        id=deposit.id,
        goal_id=goal_id,
        position=deposit.position,
        amount=deposit.amount,
        deposited_at=deposit.deposited_at,
        note=deposit.note,
    )


def create_goal(
    title: str,
    target_amount: float,
    *,
    now: datetime,
    deadline: Optional[date] = None,
) -> SavingsGoal:
    """Return a fresh, empty goal."""

    title = (title or "").strip()
    if not title:
        raise ValueError("Goal title is required.")
    if target_amount <= 0:
        raise ValueError("Target amount must be greater than zero.")
    return SavingsGoal(
        id=_new_id(),
        title=title,
        target_amount=float(target_amount),
        current_amount=0.0,
        deadline=deadline,
        created_at=now,
        is_completed=False,
        deposits=[],
    )


def deposit(
    goal: SavingsGoal,
    amount: float,
    note: Optional[str] = None,
    *,
    now: datetime,
) -> DepositResult:
    """Append a deposit and return the updated goal; ``goal`` itself is left untouched.

    Existing deposits are copied rather than moved so the caller's goal keeps
    its own collection.
    """

    if amount <= 0:
        raise ValueError("Deposit amount must be greater than zero.")

    entry = SavingsDeposit(
        id=_new_id(),
        goal_id=goal.id,
        position=len(goal.deposits),
        amount=float(amount),
        deposited_at=now,
        note=note or None,
    )
    new_amount = goal.current_amount + amount
    crossed = goal.current_amount < goal.target_amount <= new_amount

    updated = SavingsGoal(
        id=goal.id,
        title=goal.title,
        target_amount=goal.target_amount,
        current_amount=new_amount,
        deadline=goal.deadline,
        created_at=goal.created_at,
        is_completed=goal.is_completed or new_amount >= goal.target_amount,
        deposits=[*(_copy_deposit(d, goal.id) for d in goal.deposits), entry],
    )

    if crossed:
        logger.info("Savings goal %s reached its target", goal.id, extra={"target": goal.target_amount})
    return DepositResult(goal=updated, deposit=entry, completed=crossed)


def delete_goal(goals: Iterable[SavingsGoal], goal_id: str) -> list[SavingsGoal]:
    """Return ``goals`` without the goal ``goal_id`` (its deposits go with it)."""

    return [goal for goal in goals if goal.id != goal_id]


def goal_progress(goal: SavingsGoal) -> GoalProgress:
    percent = min(goal.current_amount / goal.target_amount * 100, 100.0)
    return GoalProgress(
        percent=round(percent, 2),
        remaining=max(goal.target_amount - goal.current_amount, 0.0),
    )


def is_overdue(goal: SavingsGoal, today: date) -> bool:
    return goal.deadline is not None and goal.deadline < today and not goal.is_completed


def total_saved(goals: Iterable[SavingsGoal]) -> float:
    return sum(goal.current_amount for goal in goals)
