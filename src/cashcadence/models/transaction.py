"""SQLModel definitions for hand-entered income and expense records."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.categories import ExpenseCategory, IncomeSource


class Income(SQLModel, table=True):
    """Money received on a calendar day."""

    __tablename__: ClassVar[str] = "income"

    id: str = Field(primary_key=True, max_length=128)
    source: str = Field(default=IncomeSource.OTHER.value, nullable=False, max_length=16)
    amount: float = Field(nullable=False, ge=0)
    occurred_on: date = Field(nullable=False, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    is_recurring: bool = Field(default=False, nullable=False)
    # Back-reference to the template that produced a synthesised occurrence.
    recurring_id: Optional[str] = Field(default=None, max_length=64)


class Expense(SQLModel, table=True):
    """Money spent on a calendar day."""

    __tablename__: ClassVar[str] = "expense"

    id: str = Field(primary_key=True, max_length=128)
    name: str = Field(default="", nullable=False, max_length=120)
    category: str = Field(default=ExpenseCategory.OTHER.value, nullable=False, max_length=16, index=True)
    amount: float = Field(nullable=False, ge=0)
    occurred_on: date = Field(nullable=False, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    is_recurring: bool = Field(default=False, nullable=False)
    recurring_id: Optional[str] = Field(default=None, max_length=64)
