"""Month totals and carried-forward balances over manual + recurring records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence, TypeVar

from ..logging_config import get_logger
from ..models.recurring import RecurringTransaction
from ..models.transaction import Expense, Income
from .occurrences import is_same_month, month_bounds, month_start, next_month, parse_iso_date
from .recurring import expand

logger = get_logger(__name__)

T = TypeVar("T", Income, Expense)


@dataclass(slots=True)
class PeriodSummary:
    """Realised totals and records for one month."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    incomes: list[Income] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses


@dataclass(slots=True)
class MonthOverview:
    """Carried-in balance plus the month's own activity."""

    month: date
    previous_balance: float
    summary: PeriodSummary

    @property
    def total_balance(self) -> float:
        return self.previous_balance + self.summary.balance


def merge_transactions(manual: Iterable[T], generated: Iterable[T]) -> list[T]:
    """Concatenate manual and generated records, keeping the first record per id."""

    seen: set[str] = set()
    merged: list[T] = []
    for record in [*manual, *generated]:
        if record.id in seen:
            continue
        seen.add(record.id)
        merged.append(record)
    return merged


def _in_range(records: Iterable[T], first_day: date, last_day: date) -> list[T]:
    return [r for r in records if first_day <= parse_iso_date(r.occurred_on) <= last_day]


def aggregate(
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    templates: Sequence[RecurringTransaction],
    month: date,
    *,
    today: date,
) -> PeriodSummary:
    """Return realised totals for ``month``.

    Months after the month of ``today`` have nothing realised yet. The month
    of ``today`` only counts recurring occurrences up to ``today``; past months
    count all of them.
    """

    first_day, last_day = month_bounds(month)
    if first_day > today:
        return PeriodSummary()

    generated = expand(
        templates,
        month,
        today=today,
        limit_to_today=is_same_month(month, today),
    )
    month_incomes = merge_transactions(_in_range(incomes, first_day, last_day), generated.incomes)
    month_expenses = merge_transactions(_in_range(expenses, first_day, last_day), generated.expenses)

    return PeriodSummary(
        total_income=sum(i.amount for i in month_incomes),
        total_expenses=sum(e.amount for e in month_expenses),
        incomes=month_incomes,
        expenses=month_expenses,
    )


def previous_balance(
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    templates: Sequence[RecurringTransaction],
    month: date,
) -> float:
    """Net of every manual and recurring record dated before ``month`` starts."""

    first_day = month_start(month)
    prior_incomes = [i for i in incomes if parse_iso_date(i.occurred_on) < first_day]
    prior_expenses = [e for e in expenses if parse_iso_date(e.occurred_on) < first_day]

    history = [
        *(parse_iso_date(i.occurred_on) for i in prior_incomes),
        *(parse_iso_date(e.occurred_on) for e in prior_expenses),
        *(parse_iso_date(t.start_date) for t in templates),
    ]
    if not history:
        return 0.0

    recurring_income = 0.0
    recurring_expenses = 0.0
    cursor = month_start(min(history))
    months_walked = 0
    while cursor < first_day:
        # Past months are materialised in full, so "today" never cuts them short.
        generated = expand(templates, cursor, today=cursor, limit_to_today=False)
        recurring_income += sum(i.amount for i in generated.incomes)
        recurring_expenses += sum(e.amount for e in generated.expenses)
        cursor = next_month(cursor)
        months_walked += 1

    logger.debug("Carried balance into %s across %d months", first_day.isoformat(), months_walked)

    manual_income = sum(i.amount for i in prior_incomes)
    manual_expenses = sum(e.amount for e in prior_expenses)
    return (manual_income + recurring_income) - (manual_expenses + recurring_expenses)


def month_overview(
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    templates: Sequence[RecurringTransaction],
    month: date,
    *,
    today: date,
) -> MonthOverview:
    """Bundle previous balance and period summary for ``month``."""

    return MonthOverview(
        month=month_start(month),
        previous_balance=previous_balance(incomes, expenses, templates, month),
        summary=aggregate(incomes, expenses, templates, month, today=today),
    )


def total_balance(
    incomes: Sequence[Income],
    expenses: Sequence[Expense],
    templates: Sequence[RecurringTransaction],
    month: date,
    *,
    today: date,
) -> float:
    """Displayed balance for ``month``: carried-in balance plus the month's own."""

    return month_overview(incomes, expenses, templates, month, today=today).total_balance
