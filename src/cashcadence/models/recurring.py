"""Recurring transaction templates."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.categories import RecurringFrequency


class RecurringTransaction(SQLModel, table=True):
    """A repeating income or expense rule.

    The template is the only unit of mutation: occurrences are derived from it
    at read time and are never stored or edited individually.
    """

    __tablename__: ClassVar[str] = "recurring_transaction"

    id: str = Field(primary_key=True, max_length=64)
    kind: str = Field(nullable=False, max_length=16)  # income | expense
    amount: float = Field(nullable=False, ge=0)
    frequency: str = Field(default=RecurringFrequency.MONTHLY.value, nullable=False, max_length=16)
    start_date: date = Field(nullable=False, index=True)
    end_date: Optional[date] = Field(default=None)  # inclusive
    is_paused: bool = Field(default=False, nullable=False)

    # income only
    source: Optional[str] = Field(default=None, max_length=16)
    # expense only
    name: Optional[str] = Field(default=None, max_length=120)
    category: Optional[str] = Field(default=None, max_length=16)

    description: Optional[str] = Field(default=None, max_length=255)
