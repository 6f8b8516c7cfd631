"""Savings vault goals and their deposits."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class SavingsGoal(SQLModel, table=True):
    """An accumulation target funded by deposits."""

    __tablename__: ClassVar[str] = "savings_goal"

    id: str = Field(primary_key=True, max_length=64)
    title: str = Field(nullable=False, max_length=120)
    target_amount: float = Field(nullable=False, gt=0)
    current_amount: float = Field(default=0.0, nullable=False, ge=0)
    deadline: Optional[date] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    # Latch: flips to True once current_amount reaches target_amount.
    is_completed: bool = Field(default=False, nullable=False)

    deposits: list["SavingsDeposit"] = Relationship(
        back_populates="goal",
        sa_relationship=relationship(
            "SavingsDeposit",
            back_populates="goal",
            cascade="all, delete-orphan",
            order_by="SavingsDeposit.position",
        ),
    )


class SavingsDeposit(SQLModel, table=True):
    """Append-only contribution to a goal."""

    __tablename__: ClassVar[str] = "savings_deposit"

    id: str = Field(primary_key=True, max_length=64)
    goal_id: str = Field(foreign_key="savings_goal.id", nullable=False, index=True)
    position: int = Field(default=0, nullable=False)
    amount: float = Field(nullable=False, gt=0)
    deposited_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    note: Optional[str] = Field(default=None, max_length=255)

    goal: Optional["SavingsGoal"] = Relationship(
        back_populates="deposits",
        sa_relationship=relationship("SavingsGoal", back_populates="deposits"),
    )
