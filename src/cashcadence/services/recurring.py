"""Recurring template expansion and upcoming-due scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from ..constants.categories import (
    RECURRING_ID_PREFIX,
    ExpenseCategory,
    IncomeSource,
    RecurringFrequency,
    TransactionKind,
)
from ..logging_config import get_logger
from ..models.recurring import RecurringTransaction
from ..models.transaction import Expense, Income
from .occurrences import (
    first_index_on_or_after,
    is_same_month,
    month_bounds,
    nth_occurrence,
    occurrences_in_month,
    parse_iso_date,
    parse_optional_date,
)

logger = get_logger(__name__)


class InvalidTemplateError(ValueError):
    """Raised when a recurring template cannot describe a valid rule."""


class RecurringOccurrenceDeletionError(ValueError):
    """Raised when asked to delete a synthesised occurrence instead of its template."""


@dataclass(slots=True)
class ExpandedTransactions:
    """Materialised occurrences for one month, split by kind."""

    incomes: list[Income] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)


@dataclass(slots=True)
class UpcomingOccurrence:
    """Next due date of an active template."""

    template: RecurringTransaction
    next_date: date
    days_until: int


def occurrence_id(template_id: str, occurred_on: date) -> str:
    """Deterministic id of a synthesised occurrence."""

    return f"{RECURRING_ID_PREFIX}{template_id}-{occurred_on.isoformat()}"


def is_occurrence_id(value: str) -> bool:
    return value.startswith(RECURRING_ID_PREFIX)


def validate_template(template: RecurringTransaction) -> None:
    """Reject templates that cannot describe a valid recurring rule."""

    try:
        kind = TransactionKind(template.kind)
    except ValueError as exc:
        raise InvalidTemplateError(f"Unknown transaction type: {template.kind!r}") from exc
    try:
        RecurringFrequency(template.frequency)
    except ValueError as exc:
        raise InvalidTemplateError(f"Unknown frequency: {template.frequency!r}") from exc
    if template.amount is None or template.amount < 0:
        raise InvalidTemplateError("Amount must be zero or positive.")
    end = parse_optional_date(template.end_date)
    if end is not None and end < parse_iso_date(template.start_date):
        raise InvalidTemplateError("End date must not be before the start date.")

    if kind is TransactionKind.INCOME:
        if not template.source:
            raise InvalidTemplateError("Income templates need a source.")
        if template.source not in {s.value for s in IncomeSource}:
            raise InvalidTemplateError(f"Unknown income source: {template.source!r}")
    else:
        if not template.name or not template.category:
            raise InvalidTemplateError("Expense templates need a name and a category.")
        if template.category not in {c.value for c in ExpenseCategory}:
            raise InvalidTemplateError(f"Unknown expense category: {template.category!r}")


def _materialise(template: RecurringTransaction, occurred_on: date) -> Income | Expense:
    if template.kind == TransactionKind.INCOME.value:
        return Income(
            id=occurrence_id(template.id, occurred_on),
            source=template.source or IncomeSource.OTHER.value,
            amount=template.amount,
            occurred_on=occurred_on,
            description=template.description,
            is_recurring=True,
            recurring_id=template.id,
        )
    return Expense(
        id=occurrence_id(template.id, occurred_on),
        name=template.name or "",
        category=template.category or ExpenseCategory.OTHER.value,
        amount=template.amount,
        occurred_on=occurred_on,
        description=template.description,
        is_recurring=True,
        recurring_id=template.id,
    )


def expand(
    templates: Iterable[RecurringTransaction],
    month: date,
    *,
    today: date,
    limit_to_today: bool = False,
) -> ExpandedTransactions:
    """Materialise every active template's occurrences for ``month``.

    With ``limit_to_today`` set and ``month`` being the month of ``today``,
    occurrences after ``today`` are suppressed because they have not happened
    yet. The output is a pure function of the arguments; ids are derived from
    template id and date so repeated expansion never yields duplicates.
    """

    first_day, last_day = month_bounds(month)
    cutoff = today if limit_to_today and is_same_month(month, today) else None
    result = ExpandedTransactions()

    for template in templates:
        if template.is_paused:
            continue
        start = parse_iso_date(template.start_date)
        end = parse_optional_date(template.end_date)
        if start > last_day:
            continue
        if end is not None and end < first_day:
            continue
        if template.kind not in {TransactionKind.INCOME.value, TransactionKind.EXPENSE.value}:
            logger.warning("Skipping recurring template %s with unknown type %r", template.id, template.kind)
            continue

        dates = occurrences_in_month(
            start,
            end,
            template.frequency,
            first_day,
            last_day,
            cutoff,
        )
        for occurred_on in dates:
            record = _materialise(template, occurred_on)
            if isinstance(record, Income):
                result.incomes.append(record)
            else:
                result.expenses.append(record)

    logger.debug(
        "Expanded recurring templates for %s: %d incomes, %d expenses",
        first_day.strftime("%Y-%m"),
        len(result.incomes),
        len(result.expenses),
    )
    return result


def next_occurrence(template: RecurringTransaction, today: date) -> Optional[date]:
    """Return the first firing strictly after ``today``, or ``start_date`` if in the future."""

    start = parse_iso_date(template.start_date)
    end = parse_optional_date(template.end_date)
    if end is not None and (end < today or end < start):
        return None
    if start > today:
        return start
    try:
        n = first_index_on_or_after(start, template.frequency, today + timedelta(days=1))
    except ValueError:
        return None
    candidate = nth_occurrence(start, template.frequency, n)
    if end is not None and candidate > end:
        return None
    return candidate


def upcoming(
    templates: Iterable[RecurringTransaction],
    today: date,
    days_ahead: int = 7,
) -> list[UpcomingOccurrence]:
    """List active templates whose next firing lands within ``days_ahead`` days."""

    horizon = today + timedelta(days=days_ahead)
    found: list[UpcomingOccurrence] = []
    for template in templates:
        if template.is_paused:
            continue
        upcoming_date = next_occurrence(template, today)
        if upcoming_date is None or upcoming_date > horizon:
            continue
        found.append(
            UpcomingOccurrence(
                template=template,
                next_date=upcoming_date,
                days_until=(upcoming_date - today).days,
            )
        )
    found.sort(key=lambda item: item.next_date)
    return found
