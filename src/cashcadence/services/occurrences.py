"""Calendar arithmetic and per-month occurrence generation for recurring rules.

Every occurrence is computed from the rule's anchor date rather than from the
previous occurrence, so month-length clamping never accumulates: a monthly
rule anchored on Jan 31 fires on Feb 28 (29 in leap years), Mar 31, Apr 30.
A yearly rule anchored on Feb 29 fires on Feb 28 in common years.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta
from typing import Optional

from ..constants.categories import RecurringFrequency


def parse_iso_date(value: str | date) -> date:
    """Return a ``date`` from an ISO ``YYYY-MM-DD`` string (dates pass through)."""

    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def parse_optional_date(value: str | date | None) -> Optional[date]:
    return None if value is None else parse_iso_date(value)


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    return value.replace(day=monthrange(value.year, value.month)[1])


def month_bounds(value: date) -> tuple[date, date]:
    """Return the first and last calendar day of the month containing ``value``."""

    return month_start(value), month_end(value)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole calendar months, clamping to the month's last day."""

    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def next_month(value: date) -> date:
    """Return the first day of the month after ``value``."""

    return add_months(month_start(value), 1)


def is_same_month(left: date, right: date) -> bool:
    return (left.year, left.month) == (right.year, right.month)


def months_between(earlier: date, later: date) -> int:
    """Whole calendar months from ``earlier``'s month to ``later``'s month."""

    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def nth_occurrence(start: date, frequency: RecurringFrequency | str, n: int) -> date:
    """Return the ``n``-th firing (0-based) of a rule anchored on ``start``."""

    frequency = RecurringFrequency(frequency)
    if frequency is RecurringFrequency.WEEKLY:
        return start + timedelta(weeks=n)
    if frequency is RecurringFrequency.MONTHLY:
        return add_months(start, n)
    return add_months(start, 12 * n)


def first_index_on_or_after(start: date, frequency: RecurringFrequency | str, bound: date) -> int:
    """Smallest ``n >= 0`` whose occurrence falls on or after ``bound``."""

    if bound <= start:
        return 0
    frequency = RecurringFrequency(frequency)
    if frequency is RecurringFrequency.WEEKLY:
        return -(-(bound - start).days // 7)
    step = 1 if frequency is RecurringFrequency.MONTHLY else 12
    n = max(0, months_between(start, bound) // step)
    while nth_occurrence(start, frequency, n) < bound:
        n += 1
    return n


def occurrences_in_month(
    start: date,
    end: Optional[date],
    frequency: RecurringFrequency | str,
    month_start: date,
    month_end: date,
    cutoff: Optional[date] = None,
) -> list[date]:
    """Return the dates on which a rule fires inside ``[month_start, month_end]``.

    Dates after ``end`` (inclusive bound) or after ``cutoff`` are dropped.
    Invalid rules (unknown frequency, ``end`` before ``start``) fire never.
    """

    try:
        frequency = RecurringFrequency(frequency)
    except ValueError:
        return []
    start = parse_iso_date(start)
    end = parse_optional_date(end)
    if end is not None and end < start:
        return []

    upper = month_end
    if end is not None:
        upper = min(upper, end)
    if cutoff is not None:
        upper = min(upper, cutoff)

    occurrences: list[date] = []
    n = first_index_on_or_after(start, frequency, month_start)
    current = nth_occurrence(start, frequency, n)
    while current <= upper:
        occurrences.append(current)
        n += 1
        current = nth_occurrence(start, frequency, n)
    return occurrences
