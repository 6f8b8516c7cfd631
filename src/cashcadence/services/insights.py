"""Reporting helpers for charts: category split, daily series, month comparison."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..models.transaction import Expense, Income
from .balances import PeriodSummary
from .occurrences import month_bounds, parse_iso_date


@dataclass(slots=True)
class CategoryTotal:
    category: str
    amount: float
    share: float  # percent of all expenses


@dataclass(slots=True)
class DailyData:
    """Per-day totals with the running balance since the first of the month."""

    day: date
    income: float
    expenses: float
    balance: float


@dataclass(slots=True)
class MonthComparison:
    income_change_pct: Optional[float]
    expense_change_pct: Optional[float]
    balance_delta: float


def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Roll up expense totals by category, largest first."""

    totals: dict[str, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount

    grand_total = sum(totals.values())
    breakdown = [
        CategoryTotal(
            category=category,
            amount=amount,
            share=round(amount / grand_total * 100, 2) if grand_total else 0.0,
        )
        for category, amount in totals.items()
    ]
    breakdown.sort(key=lambda entry: (-entry.amount, entry.category))
    return breakdown


def daily_series(
    incomes: Iterable[Income], expenses: Iterable[Expense], month: date
) -> list[DailyData]:
    """Return one row per calendar day of ``month``; records outside it are ignored."""

    first_day, last_day = month_bounds(month)
    income_by_day: dict[date, float] = {}
    expense_by_day: dict[date, float] = {}
    for income in incomes:
        day = parse_iso_date(income.occurred_on)
        if first_day <= day <= last_day:
            income_by_day[day] = income_by_day.get(day, 0.0) + income.amount
    for expense in expenses:
        day = parse_iso_date(expense.occurred_on)
        if first_day <= day <= last_day:
            expense_by_day[day] = expense_by_day.get(day, 0.0) + expense.amount

    rows: list[DailyData] = []
    running = 0.0
    day = first_day
    while day <= last_day:
        income = income_by_day.get(day, 0.0)
        spent = expense_by_day.get(day, 0.0)
        running += income - spent
        rows.append(DailyData(day=day, income=income, expenses=spent, balance=running))
        day += timedelta(days=1)
    return rows


def _change_pct(current: float, previous: float) -> Optional[float]:
    if previous == 0:
        return None
    return round((current - previous) / previous * 100, 2)


def compare_months(current: PeriodSummary, previous: PeriodSummary) -> MonthComparison:
    """Percent change of income and expenses versus the prior month."""

    return MonthComparison(
        income_change_pct=_change_pct(current.total_income, previous.total_income),
        expense_change_pct=_change_pct(current.total_expenses, previous.total_expenses),
        balance_delta=current.balance - previous.balance,
    )


BUDGET_LOW_THRESHOLD_PCT = 10.0


@dataclass(slots=True)
class BudgetStatus:
    """Money left from the month's income once its expenses are paid."""

    remaining: float
    percent_left: float
    exceeded: bool
    low: bool


def budget_status(period: PeriodSummary) -> BudgetStatus:
    """Flag a month whose expenses passed its income or left under 10% of it."""

    remaining = period.balance
    percent_left = remaining / period.total_income * 100 if period.total_income > 0 else 0.0
    return BudgetStatus(
        remaining=remaining,
        percent_left=round(percent_left, 2),
        exceeded=remaining < 0,
        low=0 < percent_left < BUDGET_LOW_THRESHOLD_PCT,
    )


@dataclass(slots=True)
class SavingsTargetProgress:
    percent: float
    remaining: float
    reached: bool


def savings_target_progress(saved: float, target: float) -> Optional[SavingsTargetProgress]:
    """Progress of ``saved`` toward a monthly savings target; ``None`` when no target is set."""

    if target <= 0:
        return None
    percent = min(max(saved, 0.0) / target * 100, 100.0)
    return SavingsTargetProgress(
        percent=round(percent, 2),
        remaining=target - saved,
        reached=saved >= target,
    )
