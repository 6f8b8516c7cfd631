"""Tests for calendar arithmetic and per-month occurrence generation."""

from __future__ import annotations

from datetime import date

import pytest

from cashcadence.services.occurrences import (
    add_months,
    first_index_on_or_after,
    is_same_month,
    month_bounds,
    next_month,
    nth_occurrence,
    occurrences_in_month,
    parse_iso_date,
)


class TestMonthArithmetic:
    """Month shifting clamps to the last day of shorter months."""

    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2023, 1, 31), 1, date(2023, 2, 28)),
            (date(2024, 1, 31), 3, date(2024, 4, 30)),
            (date(2023, 12, 15), 1, date(2024, 1, 15)),
            (date(2024, 3, 31), -1, date(2024, 2, 29)),
            (date(2024, 2, 29), 12, date(2025, 2, 28)),
        ],
    )
    def test_add_months(self, start, months, expected):
        assert add_months(start, months) == expected

    def test_month_bounds_leap_february(self):
        assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_next_month_rolls_year(self):
        assert next_month(date(2024, 12, 31)) == date(2025, 1, 1)

    def test_is_same_month(self):
        assert is_same_month(date(2024, 6, 1), date(2024, 6, 30))
        assert not is_same_month(date(2024, 6, 1), date(2023, 6, 1))

    def test_parse_iso_date_accepts_strings_and_dates(self):
        assert parse_iso_date("2024-06-15") == date(2024, 6, 15)
        assert parse_iso_date("2024-06-15T08:30:00") == date(2024, 6, 15)
        assert parse_iso_date(date(2024, 6, 15)) == date(2024, 6, 15)


class TestAnchoredOccurrences:
    """Occurrences are derived from the anchor, so clamping does not drift."""

    def test_monthly_end_of_month_anchor(self):
        start = date(2024, 1, 31)
        fired = [nth_occurrence(start, "monthly", n) for n in range(4)]
        assert fired == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]

    def test_yearly_leap_day_anchor(self):
        start = date(2024, 2, 29)
        assert nth_occurrence(start, "yearly", 1) == date(2025, 2, 28)
        assert nth_occurrence(start, "yearly", 4) == date(2028, 2, 29)

    def test_first_index_weekly(self):
        # 2024-01-01 + 5 weeks = 2024-02-05, the first Monday in February
        assert first_index_on_or_after(date(2024, 1, 1), "weekly", date(2024, 2, 1)) == 5

    def test_first_index_is_zero_before_start(self):
        assert first_index_on_or_after(date(2024, 3, 10), "monthly", date(2024, 1, 1)) == 0


class TestOccurrencesInMonth:
    def test_weekly_february_mondays(self):
        result = occurrences_in_month(
            date(2024, 1, 1), None, "weekly", date(2024, 2, 1), date(2024, 2, 29)
        )

        assert result == [date(2024, 2, 5), date(2024, 2, 12), date(2024, 2, 19), date(2024, 2, 26)]
        assert all(date(2024, 2, 1) <= d <= date(2024, 2, 29) for d in result)
        assert all(d.weekday() == 0 for d in result)

    def test_monthly_jan_31_lands_on_feb_29(self):
        result = occurrences_in_month(
            date(2024, 1, 31), None, "monthly", date(2024, 2, 1), date(2024, 2, 29)
        )
        assert result == [date(2024, 2, 29)]

    def test_monthly_after_short_month_returns_to_anchor_day(self):
        result = occurrences_in_month(
            date(2024, 1, 31), None, "monthly", date(2024, 3, 1), date(2024, 3, 31)
        )
        assert result == [date(2024, 3, 31)]

    def test_yearly_only_fires_in_anniversary_month(self):
        start = date(2022, 7, 4)
        assert occurrences_in_month(start, None, "yearly", date(2024, 7, 1), date(2024, 7, 31)) == [
            date(2024, 7, 4)
        ]
        assert occurrences_in_month(start, None, "yearly", date(2024, 8, 1), date(2024, 8, 31)) == []

    def test_end_date_before_month_yields_nothing(self):
        result = occurrences_in_month(
            date(2020, 1, 1), date(2023, 1, 1), "yearly", date(2024, 1, 1), date(2024, 1, 31)
        )
        assert result == []

    def test_end_date_is_inclusive(self):
        result = occurrences_in_month(
            date(2024, 1, 15), date(2024, 3, 15), "monthly", date(2024, 3, 1), date(2024, 3, 31)
        )
        assert result == [date(2024, 3, 15)]

    def test_end_date_mid_month_truncates_weekly(self):
        result = occurrences_in_month(
            date(2024, 1, 1), date(2024, 2, 14), "weekly", date(2024, 2, 1), date(2024, 2, 29)
        )
        assert result == [date(2024, 2, 5), date(2024, 2, 12)]

    def test_cutoff_suppresses_later_occurrences(self):
        args = (date(2024, 1, 20), None, "monthly", date(2024, 6, 1), date(2024, 6, 30))

        assert occurrences_in_month(*args, cutoff=date(2024, 6, 15)) == []
        assert occurrences_in_month(*args) == [date(2024, 6, 20)]

    def test_cutoff_keeps_occurrence_on_cutoff_day(self):
        result = occurrences_in_month(
            date(2024, 1, 15), None, "monthly", date(2024, 6, 1), date(2024, 6, 30), date(2024, 6, 15)
        )
        assert result == [date(2024, 6, 15)]

    def test_start_after_month_yields_nothing(self):
        result = occurrences_in_month(
            date(2024, 7, 1), None, "weekly", date(2024, 6, 1), date(2024, 6, 30)
        )
        assert result == []

    def test_start_inside_month(self):
        result = occurrences_in_month(
            date(2024, 6, 10), None, "weekly", date(2024, 6, 1), date(2024, 6, 30)
        )
        assert result == [date(2024, 6, 10), date(2024, 6, 17), date(2024, 6, 24)]

    def test_end_before_start_degrades_to_empty(self):
        result = occurrences_in_month(
            date(2024, 6, 10), date(2024, 6, 1), "weekly", date(2024, 6, 1), date(2024, 6, 30)
        )
        assert result == []

    def test_unknown_frequency_degrades_to_empty(self):
        result = occurrences_in_month(
            date(2024, 6, 1), None, "fortnightly", date(2024, 6, 1), date(2024, 6, 30)
        )
        assert result == []

    def test_repeated_calls_are_identical(self):
        args = (date(2023, 11, 3), None, "weekly", date(2024, 3, 1), date(2024, 3, 31))
        assert occurrences_in_month(*args) == occurrences_in_month(*args)
