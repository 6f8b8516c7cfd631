"""Tests for SQLModel repository implementations."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from sqlmodel import select

from cashcadence.cli import _utcnow
from cashcadence.models import SavingsDeposit
from cashcadence.services import savings
from cashcadence.services.recurring import (
    InvalidTemplateError,
    RecurringOccurrenceDeletionError,
    expand,
)

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestTransactionRepository:
    def test_add_and_list_by_range(self, transaction_repo, income_factory, expense_factory):
        transaction_repo.add_income(income_factory(100.0, date(2024, 3, 5)))
        transaction_repo.add_income(income_factory(200.0, date(2024, 4, 5)))
        transaction_repo.add_expense(expense_factory(40.0, date(2024, 4, 6)))

        march = transaction_repo.list_incomes(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))

        assert [i.amount for i in march] == [100.0]
        assert [i.occurred_on for i in transaction_repo.list_incomes()] == [date(2024, 3, 5), date(2024, 4, 5)]
        assert [e.name for e in transaction_repo.list_expenses()] == ["Groceries"]

    def test_delete_income(self, transaction_repo, income_factory):
        income = transaction_repo.add_income(income_factory(100.0, date(2024, 3, 5)))

        transaction_repo.delete_income(income.id)

        assert transaction_repo.list_incomes() == []

    def test_delete_unknown_raises_key_error(self, transaction_repo):
        with pytest.raises(KeyError):
            transaction_repo.delete_expense("missing")

    def test_recurring_occurrence_cannot_be_deleted(self, transaction_repo):
        with pytest.raises(RecurringOccurrenceDeletionError):
            transaction_repo.delete_expense("recurring-rent-2024-03-01")

    def test_recurring_occurrence_cannot_be_stored(self, transaction_repo, template_factory):
        [generated] = expand([template_factory()], date(2024, 3, 1), today=date(2024, 6, 15)).expenses

        with pytest.raises(ValueError, match="derived from templates"):
            transaction_repo.add_expense(generated)


class TestRecurringRepository:
    def test_create_and_list(self, recurring_repo, template_factory):
        recurring_repo.create(template_factory(start_date=date(2024, 2, 1), template_id="b"))
        recurring_repo.create(template_factory(kind="income", start_date=date(2024, 1, 1), template_id="a"))

        assert [t.id for t in recurring_repo.list_all()] == ["a", "b"]
        assert recurring_repo.get_by_id("a").source == "mainJob"

    def test_create_rejects_invalid_template(self, recurring_repo, template_factory):
        with pytest.raises(InvalidTemplateError):
            recurring_repo.create(template_factory(kind="income", source=None))

        assert recurring_repo.list_all() == []

    def test_pause_and_resume(self, recurring_repo, template_factory):
        recurring_repo.create(template_factory(template_id="rent"))

        paused = recurring_repo.set_paused("rent", True)

        assert paused.is_paused is True
        assert recurring_repo.list_all(include_paused=False) == []
        recurring_repo.set_paused("rent", False)
        assert [t.id for t in recurring_repo.list_all(include_paused=False)] == ["rent"]

    def test_update_replaces_template(self, recurring_repo, template_factory):
        recurring_repo.create(template_factory(template_id="rent", amount=500.0))

        recurring_repo.update(template_factory(template_id="rent", amount=650.0))

        assert recurring_repo.get_by_id("rent").amount == 650.0

    def test_update_unknown_raises(self, recurring_repo, template_factory):
        with pytest.raises(KeyError):
            recurring_repo.update(template_factory(template_id="ghost"))

    def test_delete(self, recurring_repo, template_factory):
        recurring_repo.create(template_factory(template_id="rent"))

        recurring_repo.delete("rent")

        assert recurring_repo.get_by_id("rent") is None
        with pytest.raises(KeyError):
            recurring_repo.delete("rent")


class TestSavingsGoalRepository:
    def test_save_round_trip_with_deposits(self, savings_repo):
        goal = savings_repo.save(savings.create_goal("Car", 5000.0, now=NOW))
        result = savings.deposit(goal, 1500.0, "first", now=NOW)
        savings_repo.save(result.goal)
        result = savings.deposit(savings_repo.get_by_id(goal.id), 4000.0, "second", now=NOW)
        savings_repo.save(result.goal)

        stored = savings_repo.get_by_id(goal.id)

        assert stored.current_amount == pytest.approx(5500.0)
        assert stored.is_completed is True
        assert [d.note for d in stored.deposits] == ["first", "second"]
        assert [g.id for g in savings_repo.list_goals()] == [goal.id]

    def test_delete_removes_deposits(self, savings_repo, session_factory):
        goal = savings_repo.save(savings.create_goal("Trip", 800.0, now=NOW))
        savings_repo.save(savings.deposit(goal, 100.0, now=NOW).goal)

        savings_repo.delete(goal.id)

        assert savings_repo.get_by_id(goal.id) is None
        with session_factory() as session:
            assert session.exec(select(SavingsDeposit)).all() == []

    def test_delete_unknown_goal(self, savings_repo):
        with pytest.raises(KeyError):
            savings_repo.delete("missing")

    def test_save_goal_stamped_with_command_clock(self, savings_repo):
        goal = savings.create_goal("Car", 500.0, now=_utcnow())
        goal = savings.deposit(goal, 50.0, now=_utcnow()).goal

        savings_repo.save(goal)
        stored = savings_repo.get_by_id(goal.id)
        savings_repo.save(savings.deposit(stored, 25.0, now=_utcnow()).goal)

        assert savings_repo.get_by_id(goal.id).current_amount == pytest.approx(75.0)
        assert goal.created_at.tzinfo is not None
